"""
NorrisBot - Lifecycle and reply orchestration.

The bot owns:
- Bot configuration (token, database path, display name)
- Identity and channel roster for the session
- Joke store access (first-run check, least-used joke replies)

The adapter (e.g., SlackAdapter) owns the connection and message posting.
"""

import logging
import os
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Mapping, Optional

from .errors import JokeNotFound, NoJokesAvailable, StoreError
from .filters import InboundEvent, should_reply
from .identity import BotIdentity, ChannelRef, resolve_channel, resolve_self
from .store import JokeStore

logger = logging.getLogger(__name__)

DEFAULT_BOT_NAME = "norrisbot"
LASTRUN_KEY = "lastrun"


def default_db_path() -> str:
    return os.path.join(os.getcwd(), "data", "norrisbot.db")


@dataclass
class BotConfig:
    """Configuration for the bot.

    Required:
        token: Slack bot token (BOT_API_KEY)

    Optional:
        db_path: SQLite joke database (BOT_DB_PATH, default ./data/norrisbot.db)
        name: Bot display name used for identity and mentions (BOT_NAME)
        app_token: Socket Mode app token (SLACK_APP_TOKEN)
        status_channel: Slack channel ID for online/shutdown messages
    """

    token: str
    db_path: str = ""
    name: str = DEFAULT_BOT_NAME
    app_token: Optional[str] = None
    status_channel: Optional[str] = None

    def __post_init__(self):
        if not self.db_path:
            self.db_path = default_db_path()
        if not self.name:
            self.name = DEFAULT_BOT_NAME

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BotConfig":
        """Build a config from environment variables.

        Raises:
            ValueError: no bot token configured
        """
        env = os.environ if environ is None else environ
        token = env.get("BOT_API_KEY") or env.get("SLACK_BOT_TOKEN")
        if not token:
            raise ValueError("Missing BOT_API_KEY")

        return cls(
            token=token,
            db_path=env.get("BOT_DB_PATH", ""),
            name=env.get("BOT_NAME", ""),
            app_token=env.get("SLACK_APP_TOKEN"),
            status_channel=env.get("BOT_STATUS_CHANNEL"),
        )


class BotState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    READY = "ready"


class NorrisBot:
    """
    Chuck Norris joke bot.

        config = BotConfig.from_env()
        NorrisBot(config=config).start()

    The adapter calls on_start() once its session is up and hands every
    inbound event to handle_event().
    """

    def __init__(
        self,
        config: BotConfig,
        adapter=None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.rng = rng
        self.state = BotState.DISCONNECTED

        self.identity: Optional[BotIdentity] = None
        self.channels: List[ChannelRef] = []
        self.store: Optional[JokeStore] = None

        # Default to Slack adapter (lazy import avoids requiring tokens at import time)
        if adapter is not None:
            self.adapter = adapter
        else:
            from .slack_adapter import SlackAdapter

            self.adapter = SlackAdapter(bot_token=config.token, app_token=config.app_token)

    @property
    def welcome_text(self) -> str:
        return (
            "Hi guys, roundhouse-kick anyone?"
            "\n I can tell jokes, but very honest ones. Just say `Chuck Norris` or `"
            f"{self.config.name}` to invoke me!"
        )

    def start(self, **adapter_kwargs):
        """Connect via the adapter. Blocks for as long as the adapter runs.

        Args:
            **adapter_kwargs: Passed to adapter.start() (e.g., register_signals=False).
        """
        self.state = BotState.CONNECTING
        logger.info(f"Starting {self.config.name}...")
        self.adapter.start(self, **adapter_kwargs)

    def on_start(self, members: List[Dict], channels: List[Dict]):
        """
        Session started: load identity, open the store, check for a first run.

        Raises:
            IdentityNotFound: bot name missing or ambiguous in the roster
            StoreUnavailable: joke database cannot be opened
        """
        self.state = BotState.CONNECTED

        self.identity = resolve_self(members, self.config.name)
        self.channels = [ChannelRef.from_slack(c) for c in channels]
        self.store = JokeStore.open(self.config.db_path, rng=self.rng)

        self._first_run_check()

        self.state = BotState.READY
        logger.info(
            f"{self.config.name} ready as {self.identity.member_id} "
            f"in {len(self.channels)} channels"
        )

    def _first_run_check(self):
        """Welcome the channel on the very first run, then record the run time."""
        now = datetime.now(timezone.utc).isoformat()

        try:
            lastrun = self.store.get_setting(LASTRUN_KEY)
            if lastrun is None:
                self._welcome_message()
            else:
                logger.debug(f"Last run at {lastrun}")
            self.store.set_setting(LASTRUN_KEY, now)
        except StoreError as e:
            logger.error(f"Database error during first run check: {e}")

    def _welcome_message(self):
        if not self.channels:
            logger.warning("First run but the bot is not in any channel, skipping welcome")
            return
        self.adapter.post_message(self.channels[0].name, self.welcome_text)

    def handle_event(self, raw_event: Dict) -> bool:
        """
        Process an inbound real-time event. Called by the adapter.

        Returns:
            True if a joke was posted
        """
        if self.state is not BotState.READY:
            logger.debug(f"Dropping event received while {self.state.value}")
            return False

        event = InboundEvent.from_slack(raw_event)
        if not should_reply(event, self.identity, self.config.name):
            return False

        return self.reply_with_joke(event)

    def reply_with_joke(self, event: InboundEvent) -> bool:
        """Post the least-used joke to the event's channel and count it."""
        try:
            joke = self.store.pick_least_used_joke()
        except NoJokesAvailable:
            logger.warning("No jokes available, not replying")
            return False
        except StoreError as e:
            logger.error(f"Database error picking a joke: {e}")
            return False

        channel = resolve_channel(self.channels, event.channel_id)
        if channel is None:
            logger.warning(f"Message from unknown channel {event.channel_id}, not replying")
            return False

        posted = self.adapter.post_message(channel.name, joke.text)

        try:
            self.store.mark_served(joke.id)
        except JokeNotFound:
            logger.warning(f"Joke {joke.id} disappeared before its counter was updated")
        except StoreError as e:
            logger.error(f"Database error updating joke {joke.id}: {e}")

        if posted:
            logger.info(f"Told joke {joke.id} in #{channel.name}")
        return posted
