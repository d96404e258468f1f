"""
Slack utilities - message and status posting.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


def post_message(
    slack_token: str,
    channel: str,
    text: str,
    timeout: float = 10.0,
) -> bool:
    """
    Post a message to a Slack channel.

    Args:
        slack_token: Slack Bot OAuth token
        channel: Channel ID or name to post to
        text: Message text
        timeout: Request timeout in seconds

    Returns:
        True if successful, False otherwise
    """
    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.post(
                "https://slack.com/api/chat.postMessage",
                headers={
                    "Authorization": f"Bearer {slack_token}",
                    "Content-Type": "application/json"
                },
                json={"channel": channel, "text": text}
            )
            data = response.json()
            if not data.get("ok"):
                logger.error(f"Failed to post message to {channel}: {data.get('error')}")
                return False
            return True
    except httpx.TimeoutException:
        logger.error(f"Timeout posting message to {channel}")
    except Exception as e:
        logger.error(f"Error posting message to {channel}: {e}")
    return False


def post_status_message(slack_token: str, channel: str, message: str) -> bool:
    """Post an online/shutdown status line to the status channel."""
    return post_message(slack_token, channel, message)
