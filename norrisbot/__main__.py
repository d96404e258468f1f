"""
Entrypoint: python -m norrisbot

Environment:
    BOT_API_KEY      Slack bot token (required)
    SLACK_APP_TOKEN  Socket Mode app token (required by the Slack adapter)
    BOT_DB_PATH      Joke database (default ./data/norrisbot.db)
    BOT_NAME         Bot display name (default norrisbot)
"""

import logging
import os
import sys

from dotenv import load_dotenv

from .errors import IdentityNotFound, StoreUnavailable
from .runner import BotConfig, NorrisBot

logger = logging.getLogger("norrisbot")


def main() -> None:
    """CLI entrypoint for the bot."""
    load_dotenv()
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        config = BotConfig.from_env()
        NorrisBot(config=config).start()
    except (ValueError, StoreUnavailable, IdentityNotFound) as e:
        logger.critical(f"Cannot start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
