from typing import Any, Dict, Optional
from urllib.parse import quote

from loguru import logger

from other.web_tools import HTTPSessionManager, http_session_manager

DEFAULT_API_URL = "http://localhost:5000/api"


class GatewayError(Exception):
    def __init__(self, message: str, status: int, code: Optional[str] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.data = data


class GatewayClient:
    """REST client for the payment gateway API."""

    def __init__(self, base_url: str = DEFAULT_API_URL, session_manager: HTTPSessionManager = http_session_manager):
        self.base_url = base_url.rstrip("/")
        self.session_manager = session_manager

    async def _call(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None,
                    fallback_error: str = "Request failed") -> Dict[str, Any]:
        response = await self.session_manager.get_web_request(
            method, f"{self.base_url}{path}", json=payload, return_type="json"
        )
        if not response.ok:
            data = response.data if isinstance(response.data, dict) else {}
            message = data.get("error") or fallback_error
            logger.debug(f"{method} {path} -> {response.status}: {message}")
            raise GatewayError(message, response.status, code=data.get("code"), data=data)
        return response.data

    async def create_account(self) -> Dict[str, Any]:
        return await self._call("POST", "/account/create", fallback_error="Failed to create account")

    async def fund_account(self, public_key: str) -> Dict[str, Any]:
        return await self._call("POST", "/account/fund", {"publicKey": public_key},
                                fallback_error="Failed to fund account")

    async def import_account(self, secret_key: str) -> Dict[str, Any]:
        return await self._call("POST", "/account/import", {"secretKey": secret_key},
                                fallback_error="Failed to import account")

    async def get_account_details(self, public_key: str) -> Dict[str, Any]:
        return await self._call("GET", f"/account/{quote(public_key)}",
                                fallback_error="Failed to fetch account details")

    async def make_payment(self, sender_secret_key: str, receiver_public_key: str, amount: str,
                           asset: str = "XLM", issuer: Optional[str] = None,
                           memo: Optional[str] = None) -> Dict[str, Any]:
        payload = {
            "senderSecretKey": sender_secret_key,
            "receiverPublicKey": receiver_public_key,
            "amount": amount,
            "asset": asset,
        }
        if issuer:
            payload["issuer"] = issuer
        if memo:
            payload["memo"] = memo
        return await self._call("POST", "/payment", payload, fallback_error="Failed to make payment")

    async def create_asset(self, asset_code: str, issuer_public_key: str) -> Dict[str, Any]:
        return await self._call("POST", "/asset/create",
                                {"assetCode": asset_code, "issuerPublicKey": issuer_public_key},
                                fallback_error="Failed to create asset")

    async def establish_trust(self, secret_key: str, asset_code: str, issuer_public_key: str,
                              limit: Optional[str] = None) -> Dict[str, Any]:
        payload = {"secretKey": secret_key, "assetCode": asset_code, "issuerPublicKey": issuer_public_key}
        if limit is not None:
            payload["limit"] = limit
        return await self._call("POST", "/asset/trust", payload, fallback_error="Failed to establish trust")

    async def issue_asset(self, issuer_secret_key: str, destination_public_key: str, asset_code: str,
                          amount: str) -> Dict[str, Any]:
        return await self._call("POST", "/asset/issue", {
            "issuerSecretKey": issuer_secret_key,
            "destinationPublicKey": destination_public_key,
            "assetCode": asset_code,
            "amount": amount,
        }, fallback_error="Failed to issue asset")
