"""
Bot identity and channel lookups over the Slack roster.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import IdentityNotFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BotIdentity:
    """The bot's own workspace member."""
    member_id: str
    display_name: str


@dataclass(frozen=True)
class ChannelRef:
    """A channel from the roster."""
    id: str
    name: str

    @classmethod
    def from_slack(cls, channel: Dict) -> "ChannelRef":
        return cls(id=channel["id"], name=channel.get("name", ""))


def resolve_self(members: List[Dict], display_name: str) -> BotIdentity:
    """
    Find the bot's member entry by exact name.

    Args:
        members: Slack user objects (users.list)
        display_name: Configured bot name

    Returns:
        BotIdentity for the single matching member

    Raises:
        IdentityNotFound: no member or more than one member has that name
    """
    matches = [m for m in members if m.get("name") == display_name]

    if not matches:
        raise IdentityNotFound(f"No workspace member named '{display_name}'")
    if len(matches) > 1:
        ids = ", ".join(m.get("id", "?") for m in matches)
        raise IdentityNotFound(
            f"Ambiguous bot name '{display_name}': {len(matches)} members match ({ids})"
        )

    identity = BotIdentity(member_id=matches[0]["id"], display_name=display_name)
    logger.debug(f"Resolved bot identity {identity.member_id} for '{display_name}'")
    return identity


def resolve_channel(channels: List[ChannelRef], channel_id: str) -> Optional[ChannelRef]:
    """Return the channel with the given id, or None."""
    for channel in channels:
        if channel.id == channel_id:
            return channel
    return None
