"""Tests for norrisbot.scanner"""

from unittest.mock import MagicMock, patch

from norrisbot.scanner import get_channels_for_bot, get_workspace_members


class TestGetWorkspaceMembers:
    """Tests for get_workspace_members()"""

    @patch("norrisbot.scanner.httpx.Client")
    def test_returns_members(self, mock_client_class):
        """Returns list of user objects."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.return_value = {
            "ok": True,
            "members": [
                {"id": "U000", "name": "norrisbot"},
                {"id": "U001", "name": "alice"},
            ],
        }

        result = get_workspace_members("xoxb-token")

        assert [m["id"] for m in result] == ["U000", "U001"]
        call_args = mock_client.get.call_args
        assert call_args[0][0] == "https://slack.com/api/users.list"
        assert call_args[1]["headers"]["Authorization"] == "Bearer xoxb-token"

    @patch("norrisbot.scanner.httpx.Client")
    def test_pagination_two_pages(self, mock_client_class):
        """Follows next_cursor across pages."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.side_effect = [
            {
                "ok": True,
                "members": [{"id": "U001", "name": "alice"}],
                "response_metadata": {"next_cursor": "cursor_abc"},
            },
            {
                "ok": True,
                "members": [{"id": "U000", "name": "norrisbot"}],
                "response_metadata": {"next_cursor": ""},
            },
        ]

        result = get_workspace_members("xoxb-token")

        assert len(result) == 2
        assert mock_client.get.call_count == 2
        second_params = mock_client.get.call_args_list[1][1]["params"]
        assert second_params["cursor"] == "cursor_abc"

    @patch("norrisbot.scanner.httpx.Client")
    def test_api_error_returns_empty(self, mock_client_class):
        """Returns empty list on Slack API error."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.return_value = {
            "ok": False,
            "error": "invalid_auth",
        }

        assert get_workspace_members("xoxb-token") == []

    @patch("norrisbot.scanner.httpx.Client")
    def test_error_on_second_page_keeps_first(self, mock_client_class):
        """Members collected before a failing page are returned."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.side_effect = [
            {
                "ok": True,
                "members": [{"id": "U001", "name": "alice"}],
                "response_metadata": {"next_cursor": "cursor_abc"},
            },
            {"ok": False, "error": "ratelimited"},
        ]

        result = get_workspace_members("xoxb-token")

        assert result == [{"id": "U001", "name": "alice"}]

    @patch("norrisbot.scanner.httpx.Client")
    def test_timeout_returns_empty(self, mock_client_class):
        """Returns empty list on timeout."""
        import httpx

        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.side_effect = httpx.TimeoutException("timeout")

        assert get_workspace_members("xoxb-token") == []


class TestGetChannelsForBot:
    """Tests for get_channels_for_bot()"""

    @patch("norrisbot.scanner.httpx.Client")
    def test_returns_joined_channels(self, mock_client_class):
        """Keeps only channels the bot is a member of."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.return_value = {
            "ok": True,
            "channels": [
                {"id": "C001", "name": "general", "is_member": True},
                {"id": "C002", "name": "trading", "is_member": False},
                {"id": "C003", "name": "jokes", "is_member": True},
            ],
        }

        result = get_channels_for_bot("xoxb-token")

        assert [c["id"] for c in result] == ["C001", "C003"]

    @patch("norrisbot.scanner.httpx.Client")
    def test_all_channels(self, mock_client_class):
        """member_only=False returns every visible channel."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.return_value = {
            "ok": True,
            "channels": [
                {"id": "C001", "name": "general", "is_member": True},
                {"id": "C002", "name": "trading"},
            ],
        }

        result = get_channels_for_bot("xoxb-token", member_only=False)

        assert len(result) == 2

    @patch("norrisbot.scanner.httpx.Client")
    def test_request_params(self, mock_client_class):
        """Requests public and private channels from conversations.list."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.return_value.json.return_value = {"ok": True, "channels": []}

        get_channels_for_bot("xoxb-token")

        call_args = mock_client.get.call_args
        assert call_args[0][0] == "https://slack.com/api/conversations.list"
        assert call_args[1]["params"]["types"] == "public_channel,private_channel"
        assert call_args[1]["params"]["limit"] == 200
        assert "cursor" not in call_args[1]["params"]

    @patch("norrisbot.scanner.httpx.Client")
    def test_network_error_returns_empty(self, mock_client_class):
        """Returns empty list on unexpected errors."""
        mock_client = MagicMock()
        mock_client_class.return_value.__enter__.return_value = mock_client
        mock_client.get.side_effect = Exception("Network error")

        assert get_channels_for_bot("xoxb-token") == []
