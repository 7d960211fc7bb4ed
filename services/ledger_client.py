from typing import Any, Dict, List

from loguru import logger
from stellar_sdk import Account, AiohttpClient, ServerAsync, TransactionEnvelope


class LedgerClient:
    """
    Thin adapter over Horizon. Every call is a single round trip with its own
    ``ServerAsync`` context; SDK exceptions are not caught here.
    """

    def __init__(self, horizon_url: str):
        self.horizon_url = horizon_url

    def _server(self) -> ServerAsync:
        return ServerAsync(horizon_url=self.horizon_url, client=AiohttpClient())

    async def load_account(self, public_key: str) -> Account:
        async with self._server() as server:
            return await server.load_account(account_id=public_key)

    async def get_account(self, public_key: str) -> Dict[str, Any]:
        async with self._server() as server:
            return await server.accounts().account_id(public_key).call()

    async def list_transactions(self, public_key: str, limit: int = 10, order: str = "desc") -> List[Dict[str, Any]]:
        async with self._server() as server:
            response = await (
                server.transactions()
                .for_account(public_key)
                .limit(limit)
                .order(desc=order == "desc")
                .call()
            )
        return response["_embedded"]["records"]

    async def fetch_base_fee(self) -> int:
        async with self._server() as server:
            return await server.fetch_base_fee()

    async def submit(self, envelope: TransactionEnvelope) -> Dict[str, Any]:
        async with self._server() as server:
            response = await server.submit_transaction(envelope)
        logger.info(f"Transaction {response.get('hash')} submitted to {self.horizon_url}")
        return response
