import logging
from datetime import timedelta

import sentry_sdk
from cachetools import TTLCache
from loguru import logger
from quart import Quart
from quart_cors import cors

import routers.account
import routers.asset
import routers.index
import routers.payment
from other.config_reader import config, update_test_mode
from other.web_tools import http_session_manager
from routers.helpers import register_error_handlers
from services.account_service import AccountService
from services.faucet import FriendbotFaucet
from services.ledger_client import LedgerClient
from services.transaction_builder import TransactionWorkflow

# One report per distinct error per hour
error_cache = TTLCache(maxsize=100, ttl=timedelta(hours=1).total_seconds())


def before_send(event, hint):
    error_type = event.get("exception", {}).get("values", [{}])[0].get("type", "")
    error_value = event.get("exception", {}).get("values", [{}])[0].get("value", "")
    error_key = f"{error_type}:{error_value}"

    if error_key in error_cache:
        return None

    error_cache[error_key] = True
    return event


def create_app(ledger_client: LedgerClient = None, faucet: FriendbotFaucet = None, settings=config) -> Quart:
    """
    Build the gateway. The ledger client and faucet can be injected, otherwise
    they are constructed from settings.
    """
    app = Quart(__name__)
    app = cors(app, allow_origin="*")

    app.ledger_client = ledger_client or LedgerClient(settings.horizon_url)
    faucet = faucet or FriendbotFaucet(settings.friendbot_url)
    app.account_service = AccountService(app.ledger_client, faucet, history_limit=settings.history_limit)
    app.transaction_workflow = TransactionWorkflow(
        app.ledger_client,
        network_passphrase=settings.network_passphrase,
        base_fee=settings.base_fee,
        timeout=settings.tx_timeout,
    )

    app.register_blueprint(routers.index.blueprint)
    app.register_blueprint(routers.account.blueprint)
    app.register_blueprint(routers.payment.blueprint)
    app.register_blueprint(routers.asset.blueprint)
    register_error_handlers(app)

    @app.after_serving
    async def close_http_session():
        await http_session_manager.close()

    return app


def init_observability():
    logger.add(config.log_path, level=logging.INFO, rotation="10 MB")
    if config.sentry_dsn:
        sentry_sdk.init(
            dsn=config.sentry_dsn,
            traces_sample_rate=0.1,
            profiles_sample_rate=0.1,
            before_send=before_send,
        )


if __name__ == "__main__":
    update_test_mode()
    init_observability()
    app = create_app()
    logger.info(f"Gateway on port {config.port}, horizon {config.horizon_url}")
    if config.test_mode:
        app.run(host="0.0.0.0", port=config.port, debug=True)
    else:
        import uvicorn
        uvicorn.run(app, host="0.0.0.0", port=config.port, access_log=False)
