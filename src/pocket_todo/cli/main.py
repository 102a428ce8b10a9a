# src/pocket_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds and hydrates AppState, runs the console REPL,
then flushes pending task writes before exiting.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import shutdown_state, start_state
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def run_app(settings: Settings) -> None:
    state = await start_state(settings=settings)
    try:
        await run_console_loop(state)
    finally:
        await shutdown_state(state)


def main() -> None:
    settings = get_settings()

    # Console shows only warnings+ unless the configured level is stricter.
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    console_level = max(file_level, logging.WARNING)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level, file_level=file_level)

    logger.info(
        "Starting %s (storage=%s path=%s log=%s)...",
        settings.app_name,
        settings.storage_backend,
        settings.storage_path,
        log_file,
    )

    try:
        asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
