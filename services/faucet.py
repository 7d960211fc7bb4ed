from typing import Any, Dict
from urllib.parse import urlencode

from loguru import logger

from other.web_tools import http_session_manager
from services.errors import FundingError


class FriendbotFaucet:
    """Test-network funding through Friendbot."""

    def __init__(self, friendbot_url: str, session_manager=http_session_manager):
        self.friendbot_url = friendbot_url.rstrip("/")
        self.session_manager = session_manager

    async def fund(self, public_key: str) -> Dict[str, Any]:
        url = f"{self.friendbot_url}?{urlencode({'addr': public_key})}"
        try:
            response = await self.session_manager.get_web_request("GET", url, return_type="json")
        except Exception as e:
            logger.warning(f"Friendbot request for {public_key} failed: {e}")
            raise FundingError("Failed to create and fund account", address=public_key) from e

        if response.status != 200:
            detail = response.data.get("detail") if isinstance(response.data, dict) else response.data
            logger.warning(f"Friendbot refused {public_key}: {response.status} {detail}")
            raise FundingError(
                "Failed to create and fund account",
                address=public_key,
                remote_status=response.status,
                detail=detail,
            )

        logger.info(f"Account {public_key} funded by friendbot")
        return response.data
