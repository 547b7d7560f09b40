"""Kernel time – Clock port and UTC helpers."""
from message_gateway.kernel.time.clock import Clock, SystemClock, as_utc, isoformat, utc_now

__all__ = ["Clock", "SystemClock", "as_utc", "isoformat", "utc_now"]
