from typing import Any, Dict, Optional

from client.api import GatewayClient
from client.poller import DEFAULT_POLL_INTERVAL, AccountPoller
from client.storage import AccountStore
from services.models import AccountKeys


class NoActiveAccountError(Exception):
    pass


class WalletSession:
    """Active account plus the gateway calls made on its behalf."""

    def __init__(self, client: GatewayClient, store: AccountStore):
        self.client = client
        self.store = store

    @property
    def account(self) -> Optional[AccountKeys]:
        return self.store.load()

    def _require_account(self) -> AccountKeys:
        keys = self.store.load()
        if keys is None:
            raise NoActiveAccountError("No active account")
        return keys

    def _remember(self, data: Dict[str, Any]) -> AccountKeys:
        keys = AccountKeys(public_key=data["publicKey"], secret_key=data["secretKey"])
        self.store.save(keys)
        return keys

    async def create_account(self) -> AccountKeys:
        return self._remember(await self.client.create_account())

    async def import_account(self, secret_key: str) -> AccountKeys:
        return self._remember(await self.client.import_account(secret_key))

    def logout(self):
        self.store.clear()

    async def details(self) -> Dict[str, Any]:
        return await self.client.get_account_details(self._require_account().public_key)

    async def pay(self, receiver_public_key: str, amount: str, asset: str = "XLM",
                  issuer: Optional[str] = None, memo: Optional[str] = None) -> Dict[str, Any]:
        keys = self._require_account()
        return await self.client.make_payment(keys.secret_key, receiver_public_key, amount,
                                              asset=asset, issuer=issuer, memo=memo)

    async def trust(self, asset_code: str, issuer_public_key: str, limit: Optional[str] = None) -> Dict[str, Any]:
        keys = self._require_account()
        return await self.client.establish_trust(keys.secret_key, asset_code, issuer_public_key, limit=limit)

    async def issue(self, destination_public_key: str, asset_code: str, amount: str) -> Dict[str, Any]:
        keys = self._require_account()
        return await self.client.issue_asset(keys.secret_key, destination_public_key, asset_code, amount)

    def poller(self, on_update, on_error=None, interval: float = DEFAULT_POLL_INTERVAL) -> AccountPoller:
        return AccountPoller(self.details, on_update, on_error=on_error, interval=interval)
