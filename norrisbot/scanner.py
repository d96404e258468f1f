"""
Roster utilities - workspace members and channels the bot can talk in.

Both lookups use cursor pagination against the Slack Web API and return
whatever was collected so far if a page fails.
"""

import logging
from typing import Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


def _list_all(
    slack_token: str,
    method: str,
    key: str,
    params: Optional[Dict] = None,
    timeout: float = 10.0,
) -> List[Dict]:
    """Collect every item under `key` from a paginated Slack list method."""
    items: List[Dict] = []
    cursor = None

    try:
        with httpx.Client(timeout=timeout) as client:
            while True:
                page_params = {"limit": 200, **(params or {})}
                if cursor:
                    page_params["cursor"] = cursor

                response = client.get(
                    f"https://slack.com/api/{method}",
                    headers={"Authorization": f"Bearer {slack_token}"},
                    params=page_params,
                )
                data = response.json()

                if not data.get("ok"):
                    logger.warning(f"Slack API error in {method}: {data.get('error')}")
                    return items

                items.extend(data.get(key, []))

                cursor = data.get("response_metadata", {}).get("next_cursor")
                if not cursor:
                    break

    except httpx.TimeoutException:
        logger.error(f"Timeout calling {method}")
    except Exception as e:
        logger.error(f"Error calling {method}: {e}")

    return items


def get_workspace_members(
    slack_token: str,
    timeout: float = 10.0,
) -> List[Dict]:
    """
    Fetch all members of the workspace.

    Args:
        slack_token: Slack Bot OAuth token
        timeout: Request timeout in seconds

    Returns:
        List of Slack user objects
    """
    members = _list_all(slack_token, "users.list", "members", timeout=timeout)
    logger.debug(f"Got {len(members)} workspace members")
    return members


def get_channels_for_bot(
    slack_token: str,
    member_only: bool = True,
    timeout: float = 10.0,
) -> List[Dict]:
    """
    Discover channels visible to the bot.

    Args:
        slack_token: Slack Bot OAuth token
        member_only: Keep only channels the bot has joined
        timeout: Request timeout in seconds

    Returns:
        List of Slack channel objects
    """
    channels = _list_all(
        slack_token,
        "conversations.list",
        "channels",
        params={"types": "public_channel,private_channel", "exclude_archived": "true"},
        timeout=timeout,
    )
    if member_only:
        channels = [c for c in channels if c.get("is_member")]

    logger.debug(f"Discovered {len(channels)} channels")
    return channels
