"""Background worker – message processor, status notifier and outbox dispatcher.

Usage::

    message-gateway-worker processor
    message-gateway-worker notifier
    message-gateway-worker outbox
"""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import signal
import sys
from typing import Sequence

from message_gateway.application import MessageProcessor, StatusNotifier
from message_gateway.config import ConfigError, GatewaySettings, load_settings
from message_gateway.kernel.errors import BaseError
from message_gateway.kernel.messaging import EventConsumer
from message_gateway.observability.logging import JsonLoggerFactory, get_logger
from message_gateway.runtime import Runtime, create_consumer

logger = get_logger(__name__)

ROLES = ("processor", "notifier", "outbox")


def install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Set *stop_event* on SIGINT / SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        with contextlib.suppress(NotImplementedError):
            # not available on Windows event loops
            loop.add_signal_handler(sig, stop_event.set)


async def _until_stopped(stop_event: asyncio.Event, consumer: EventConsumer) -> None:
    """Return when *stop_event* is set; raise when a consume loop dies first."""
    stopping = asyncio.create_task(stop_event.wait())
    consuming = asyncio.create_task(consumer.join())
    try:
        await asyncio.wait({stopping, consuming}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (stopping, consuming):
            task.cancel()
        await asyncio.gather(stopping, consuming, return_exceptions=True)
    if consuming.done() and not consuming.cancelled():
        consuming.result()


async def run_role(
    role: str,
    runtime: Runtime,
    stop_event: asyncio.Event,
    consumer: EventConsumer | None = None,
) -> None:
    """Run one worker role until *stop_event* is set.

    A consumer whose loop dies raises :class:`ConsumeError` out of here, so
    the process exits instead of idling. The runtime must already be
    connected. *consumer* defaults to one built for the configured transport.
    """
    settings = runtime.settings
    if role == "outbox":
        await runtime.outbox_dispatcher().run(settings.outbox_poll_interval, stop_event)
        return

    consumer = consumer or create_consumer(settings, dead_letter=runtime.publisher)
    try:
        if role == "processor":
            processor = MessageProcessor(runtime.store, runtime.publisher, status_channel=settings.status_channel)
            await consumer.subscribe(settings.message_channel, processor.handle)
        elif role == "notifier":
            await consumer.subscribe(settings.status_channel, StatusNotifier().handle)
        else:
            raise ValueError(f"Unknown worker role {role!r}")
        logger.info("worker.started", role=role, transport=runtime.publisher.transport)
        await _until_stopped(stop_event, consumer)
    finally:
        await consumer.close()
        logger.info("worker.stopped", role=role)


async def async_main(role: str, settings: GatewaySettings) -> None:
    stop_event = asyncio.Event()
    install_signal_handlers(stop_event)
    async with Runtime.from_settings(settings) as runtime:
        await run_role(role, runtime, stop_event)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="message-gateway-worker", description=__doc__.splitlines()[0])
    parser.add_argument("role", choices=ROLES)
    parser.add_argument("--env-file", default=None, help="load settings from this .env file first")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.env_file)
    except ConfigError as exc:
        print(f"configuration error: {exc.message}", file=sys.stderr)
        return 2
    JsonLoggerFactory.configure(settings.log_level, service_name=f"{settings.service_name}-{args.role}")
    try:
        asyncio.run(async_main(args.role, settings))
    except BaseError as exc:
        logger.error("worker.failed", role=args.role, **exc.log_fields())
        return 1
    return 0


__all__ = ["ROLES", "async_main", "build_parser", "install_signal_handlers", "main", "run_role"]


if __name__ == "__main__":
    sys.exit(main())
