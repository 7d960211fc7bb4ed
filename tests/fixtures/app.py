"""
Fixtures for the Quart gateway application and test client.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from other.config_reader import Settings
from other.web_tools import HTTPSessionManager
from services.faucet import FriendbotFaucet
from services.ledger_client import LedgerClient
from .constants import NETWORK_PASSPHRASE


@pytest.fixture
def settings():
    return Settings(network_passphrase=NETWORK_PASSPHRASE, sentry_dsn=None, test_mode=True)


@pytest.fixture
async def session_manager():
    manager = HTTPSessionManager()
    yield manager
    await manager.close()


@pytest.fixture
def mock_ledger():
    """
    Ledger client double. Any call that reaches it is visible through the
    individual AsyncMock attributes.
    """
    ledger = MagicMock(spec=LedgerClient)
    ledger.horizon_url = "http://ledger.invalid"
    ledger.load_account = AsyncMock()
    ledger.get_account = AsyncMock()
    ledger.list_transactions = AsyncMock(return_value=[])
    ledger.fetch_base_fee = AsyncMock(return_value=100)
    ledger.submit = AsyncMock()
    return ledger


@pytest.fixture
def mock_faucet():
    faucet = MagicMock(spec=FriendbotFaucet)
    faucet.fund = AsyncMock(return_value={"successful": True})
    return faucet


@pytest.fixture
def app(mock_ledger, mock_faucet, settings):
    """
    Gateway wired to the ledger and faucet doubles.
    """
    from start import create_app

    return create_app(ledger_client=mock_ledger, faucet=mock_faucet, settings=settings)


@pytest.fixture
def client(app):
    """
    Usage:
        async def test_endpoint(client):
            response = await client.post("/api/account/create")
            assert response.status_code == 200
    """
    return app.test_client()


@pytest.fixture
def live_ledger(mock_horizon):
    return LedgerClient(mock_horizon.url)


@pytest.fixture
def live_faucet(mock_horizon, session_manager):
    return FriendbotFaucet(mock_horizon.friendbot_url, session_manager=session_manager)


@pytest.fixture
def live_app(live_ledger, live_faucet, settings):
    """
    Gateway talking to the in-process Horizon mock over HTTP.
    """
    from start import create_app

    return create_app(ledger_client=live_ledger, faucet=live_faucet, settings=settings)


@pytest.fixture
def live_client(live_app):
    return live_app.test_client()
