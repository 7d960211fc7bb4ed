from tests.fixtures.app import (  # noqa: F401
    app,
    client,
    live_app,
    live_client,
    live_faucet,
    live_ledger,
    mock_faucet,
    mock_ledger,
    session_manager,
    settings,
)
from tests.fixtures.horizon import horizon_server_config, mock_horizon  # noqa: F401
