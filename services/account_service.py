from typing import Any, Dict, List

from loguru import logger
from stellar_sdk import Keypair
from stellar_sdk.exceptions import BaseHorizonError, ConnectionError as HorizonConnectionError, NotFoundError

from services.errors import AccountLoadError, AccountNotFoundError, FundingError
from services.faucet import FriendbotFaucet
from services.ledger_client import LedgerClient
from services.models import AccountDetails, AccountKeys
from services.transaction_builder import keypair_from_secret


class AccountService:
    def __init__(self, ledger: LedgerClient, faucet: FriendbotFaucet, history_limit: int = 10):
        self.ledger = ledger
        self.faucet = faucet
        self.history_limit = history_limit

    async def create_account(self) -> AccountKeys:
        """
        Generate a keypair and fund it through the faucet.

        A funding failure raises ``FundingError`` with the generated keys
        attached; they stay valid and can be funded later with
        ``fund_account``.
        """
        keys = AccountKeys.from_keypair(Keypair.random())
        logger.info(f"Created keypair {keys.public_key}")
        try:
            await self.faucet.fund(keys.public_key)
        except FundingError as e:
            e.keys = keys
            raise
        return keys

    async def fund_account(self, public_key: str) -> Dict[str, Any]:
        return await self.faucet.fund(public_key)

    @staticmethod
    def import_account(secret_key: str) -> AccountKeys:
        return AccountKeys.from_keypair(keypair_from_secret(secret_key))

    async def _fetch_account(self, public_key: str) -> Dict[str, Any]:
        try:
            return await self.ledger.get_account(public_key)
        except NotFoundError as e:
            raise AccountNotFoundError(f"Account {public_key} not found", account=public_key) from e
        except (BaseHorizonError, HorizonConnectionError) as e:
            logger.warning(f"Error fetching account {public_key}: {e}")
            raise AccountLoadError("Failed to fetch account details", account=public_key) from e

    async def get_balances(self, public_key: str) -> List[Dict[str, Any]]:
        account = await self._fetch_account(public_key)
        return account.get("balances", [])

    async def get_account_details(self, public_key: str) -> AccountDetails:
        account = await self._fetch_account(public_key)
        try:
            transactions = await self.ledger.list_transactions(public_key, limit=self.history_limit, order="desc")
        except (BaseHorizonError, HorizonConnectionError) as e:
            logger.warning(f"Error fetching transactions for {public_key}: {e}")
            raise AccountLoadError("Failed to fetch account details", account=public_key) from e
        return AccountDetails(balances=account.get("balances", []), transactions=transactions)
