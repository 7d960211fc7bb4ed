"""
Shared constants for test fixtures.
"""

from stellar_sdk import Network

HORIZON_PORT_START = 8000
HORIZON_PORT_END = 9000
HORIZON_PORT_RETRIES = 10

NETWORK_PASSPHRASE = Network.TESTNET_NETWORK_PASSPHRASE

STARTING_BALANCE = "10000.0000000"
BASE_FEE_IN_STROOPS = 100
