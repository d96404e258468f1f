"""
Message filter - decides whether an inbound Slack event gets a joke.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .identity import BotIdentity

TRIGGER_PHRASE = "chuck norris"

# Slack public channel ids start with "C" (DMs "D", group DMs "G")
CHANNEL_PREFIX = "C"


@dataclass
class InboundEvent:
    """A single real-time event as seen by the filter."""
    kind: str
    text: Optional[str] = None
    channel_id: Optional[str] = None
    sender_id: Optional[str] = None

    @classmethod
    def from_slack(cls, event: Dict) -> "InboundEvent":
        return cls(
            kind=event.get("type", ""),
            text=event.get("text"),
            channel_id=event.get("channel"),
            sender_id=event.get("user"),
        )


def is_chat_message(event: InboundEvent) -> bool:
    return event.kind == "message" and bool(event.text)


def is_channel_conversation(event: InboundEvent) -> bool:
    return isinstance(event.channel_id, str) and event.channel_id.startswith(CHANNEL_PREFIX)


def is_from_self(event: InboundEvent, identity: BotIdentity) -> bool:
    """True for messages the bot posted itself (replying would loop)."""
    return event.sender_id == identity.member_id


def mentions_trigger(event: InboundEvent, display_name: str) -> bool:
    """True if the text mentions Chuck Norris or the bot's name, ignoring case."""
    text = (event.text or "").lower()
    return TRIGGER_PHRASE in text or bool(display_name and display_name.lower() in text)


def should_reply(event: InboundEvent, identity: BotIdentity, display_name: str) -> bool:
    return (
        is_chat_message(event)
        and is_channel_conversation(event)
        and not is_from_self(event, identity)
        and mentions_trigger(event, display_name)
    )
