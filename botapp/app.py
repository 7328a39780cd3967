#!/usr/bin/env python3
"""
Equipment booking bot - entrypoint wrapper around the runtime application.
"""
from tracking import t

import logging
import sys
from pathlib import Path

if __name__ == "__main__" and __package__ is None:
    sys.path.append(str(Path(__file__).resolve().parents[1]))
    __package__ = "botapp"

from botapp.config import load_bot_config
from botapp.runtime import BotApplication
from infrastructure.logging_config import setup_logging


class BookingBot(BotApplication):
    """Named entry point for the runtime bot application."""

    def __init__(self, config=None):
        t('botapp.app.BookingBot.__init__')
        super().__init__(config=config)


def main() -> None:
    """Entry point used by both CLI script and module execution."""
    t('botapp.app.main')

    config = load_bot_config()
    log_dir = setup_logging(config.log_directory, production_mode=config.telegram.production_mode)

    logger = logging.getLogger('Main')
    logger.info("=" * 50)
    logger.info("Equipment Booking Bot")
    logger.info("Store: %s (%s)", config.store.backend, config.store.collection)
    logger.info("Logs: %s", log_dir)
    logger.info("=" * 50)

    bot = BookingBot(config)

    try:
        logger.info("🚀 Starting bot...")
        bot.run()
    except KeyboardInterrupt:
        logger.info("✅ Stopped by user (Ctrl+C)")
    except Exception as exc:
        logger.error("❌ Error: %s", exc, exc_info=True)
        raise


if __name__ == '__main__':
    main()
