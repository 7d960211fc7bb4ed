#!/usr/bin/env python3
"""
End-to-end cross-border payment run against the Stellar test network:
an issuer (a bank) issues USD to a sender, who pays a receiver.
"""

import asyncio

from loguru import logger

from other.config_reader import config
from other.web_tools import http_session_manager
from services.account_service import AccountService
from services.faucet import FriendbotFaucet
from services.ledger_client import LedgerClient
from services.models import ChangeTrustOp, PaymentOp
from services.transaction_builder import TransactionWorkflow, create_custom_asset, keypair_from_secret


async def show_balances(accounts: AccountService, name: str, public_key: str):
    logger.info(f"{name} balances:")
    for balance in await accounts.get_balances(public_key):
        code = "XLM" if balance["asset_type"] == "native" else balance["asset_code"]
        logger.info(f"- {balance['balance']} {code}")


async def demonstrate_cross_border_payment():
    ledger = LedgerClient(config.horizon_url)
    accounts = AccountService(ledger, FriendbotFaucet(config.friendbot_url))
    base_fee = await ledger.fetch_base_fee()
    workflow = TransactionWorkflow(ledger, config.network_passphrase, base_fee=base_fee, timeout=config.tx_timeout)
    logger.info(f"Base fee {base_fee} stroops")

    logger.info("1. Creating accounts")
    issuer = await accounts.create_account()
    sender = await accounts.create_account()
    receiver = await accounts.create_account()
    for name, keys in (("issuer", issuer), ("sender", sender), ("receiver", receiver)):
        logger.info(f"{name}: {keys.public_key}")

    logger.info("2. Initial balances")
    await show_balances(accounts, "sender", sender.public_key)
    await show_balances(accounts, "receiver", receiver.public_key)

    logger.info("3. Creating USD asset")
    usd = create_custom_asset("USD", issuer.public_key)

    logger.info("4. Establishing trust for USD")
    for keys in (sender, receiver):
        await workflow.build_and_submit(keypair_from_secret(keys.secret_key), [ChangeTrustOp(usd, limit="1000")])

    logger.info("5. Issuing 100 USD to the sender")
    await workflow.build_and_submit(
        keypair_from_secret(issuer.secret_key), [PaymentOp(sender.public_key, usd, "100")]
    )
    await show_balances(accounts, "sender", sender.public_key)

    logger.info("6. Paying 50 USD to the receiver")
    result = await workflow.build_and_submit(
        keypair_from_secret(sender.secret_key), [PaymentOp(receiver.public_key, usd, "50")], memo="cross-border"
    )
    logger.info(f"Payment {result['hash']} in ledger {result['ledger']}")

    logger.info("7. Final balances")
    await show_balances(accounts, "sender", sender.public_key)
    await show_balances(accounts, "receiver", receiver.public_key)


async def main():
    try:
        await demonstrate_cross_border_payment()
    finally:
        await http_session_manager.close()


if __name__ == "__main__":
    asyncio.run(main())
