"""
norrisbot: Slack bot that answers Chuck Norris mentions with jokes.

Usage:
    from norrisbot import BotConfig, NorrisBot

    config = BotConfig(token="xoxb-...", db_path="data/norrisbot.db", name="norrisbot")
    NorrisBot(config=config).start()

Or from the shell, configured through BOT_API_KEY, SLACK_APP_TOKEN,
BOT_DB_PATH and BOT_NAME:
    python -m norrisbot
"""

from .errors import (
    IdentityNotFound,
    JokeNotFound,
    NoJokesAvailable,
    NorrisBotError,
    StoreError,
    StoreUnavailable,
)
from .filters import InboundEvent, should_reply
from .identity import BotIdentity, ChannelRef, resolve_channel, resolve_self
from .runner import BotConfig, BotState, NorrisBot
from .slack_adapter import SlackAdapter
from .store import Joke, JokeStore

__all__ = [
    "NorrisBot",
    "BotConfig",
    "BotState",
    "SlackAdapter",
    "JokeStore",
    "Joke",
    "BotIdentity",
    "ChannelRef",
    "resolve_self",
    "resolve_channel",
    "InboundEvent",
    "should_reply",
    "NorrisBotError",
    "StoreError",
    "StoreUnavailable",
    "NoJokesAvailable",
    "JokeNotFound",
    "IdentityNotFound",
]
__version__ = "1.0.0"
