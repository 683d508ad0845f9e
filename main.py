"""
main.py — Single entry point.

Resolves configuration once, builds the model provider (or none, for
catalog-only mode) and serves the search API until SIGINT/SIGTERM.
"""
import asyncio
import logging
import signal
import sys

import config
from providers.manager import build_provider
from server import start_server

logging.basicConfig(
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("aiohttp.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


async def run() -> None:
    settings = config.load_provider_settings()
    provider = build_provider(settings)

    runner = await start_server(
        provider,
        host=config.HOST,
        port=config.PORT,
        model_timeout=settings.timeout,
    )

    stop_event = asyncio.Event()

    def _stop(*_):
        logger.info("Shutdown signal received.")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _stop)
        except (NotImplementedError, RuntimeError):
            # Windows doesn't support add_signal_handler for all signals
            pass

    logger.info("✅ Search API is running. Press Ctrl+C to stop.")
    try:
        await stop_event.wait()
    finally:
        logger.info("Shutting down…")
        await runner.cleanup()
        logger.info("Goodbye.")


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
