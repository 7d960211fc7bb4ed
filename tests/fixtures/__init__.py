"""
Test fixtures for the payment gateway.

- app.py: Quart application wired to the mock Horizon server
- horizon.py: in-process Horizon and Friendbot mock
- constants.py: shared values
"""
