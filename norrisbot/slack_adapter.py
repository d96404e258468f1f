"""
SlackAdapter - Slack interface for NorrisBot.

Handles the Socket Mode connection, roster loading, event routing
and message posting. Routes message events to NorrisBot.
"""

import logging
import os
import signal
import sys
import threading
from typing import Optional

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from .scanner import get_channels_for_bot, get_workspace_members
from .utils import post_message, post_status_message

logger = logging.getLogger(__name__)


class SlackAdapter:
    """Slack Socket Mode adapter. Routes messages to a NorrisBot."""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        app_token: Optional[str] = None,
    ):
        self.bot_token = bot_token or os.environ.get("SLACK_BOT_TOKEN")
        self.app_token = app_token or os.environ.get("SLACK_APP_TOKEN")

        if not self.bot_token or not self.app_token:
            raise ValueError("Missing SLACK_BOT_TOKEN or SLACK_APP_TOKEN")

        self.bot = None
        self.handler = None

    def start(self, bot, register_signals: bool = True):
        """Connect via Socket Mode, start the bot session and block."""
        self.bot = bot
        # Listeners run inline on a single socket worker: one event at a time
        self.app = App(token=self.bot_token, process_before_response=True)
        self._register_handlers()

        if register_signals:
            signal.signal(signal.SIGTERM, self._shutdown_handler)
            signal.signal(signal.SIGINT, self._shutdown_handler)

        self.handler = SocketModeHandler(self.app, self.app_token, concurrency=1)
        self.handler.connect()

        try:
            self._on_connected()
        except Exception:
            self.handler.close()
            raise

        self._post_status(f":white_check_mark: {bot.config.name} is online!")
        threading.Event().wait()

    def _on_connected(self):
        """Load the roster and signal session start to the bot."""
        members = get_workspace_members(self.bot_token)
        channels = get_channels_for_bot(self.bot_token)
        logger.info(f"Connected: {len(members)} members, {len(channels)} channels")
        self.bot.on_start(members, channels)

    def _register_handlers(self):
        """Register Slack event handlers."""

        @self.app.event("message")
        def handle_message(event):
            self._handle_message(event)

    def _handle_message(self, event):
        """Route a message event to the bot."""
        try:
            self.bot.handle_event(event)
        except Exception as e:
            logger.error(f"Error processing message: {e}", exc_info=True)

    def post_message(self, channel: str, text: str) -> bool:
        """Post text to a channel (ID or name) as the bot user."""
        return post_message(self.bot_token, channel, text)

    def _post_status(self, message: str):
        """Post to status channel if configured."""
        if self.bot and self.bot.config.status_channel:
            post_status_message(self.bot_token, self.bot.config.status_channel, message)

    def _shutdown_handler(self, signum, frame):
        """Graceful shutdown."""
        logger.info("Shutdown signal received...")
        self._post_status(f":warning: {self.bot.config.name} is shutting down...")
        if self.handler:
            self.handler.close()
        sys.exit(0)
