import pytest
from unittest.mock import AsyncMock
from stellar_sdk import Keypair


@pytest.mark.asyncio
async def test_create_asset(client, mock_ledger):
    issuer = Keypair.random().public_key

    response = await client.post("/api/asset/create", json={"assetCode": "USD", "issuerPublicKey": issuer})

    assert response.status_code == 200
    assert await response.get_json() == {"assetCode": "USD", "issuer": issuer, "assetType": "credit_alphanum4"}
    mock_ledger.load_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_long_code_asset(client):
    issuer = Keypair.random().public_key

    response = await client.post("/api/asset/create", json={"assetCode": "EURODOLLAR", "issuerPublicKey": issuer})

    assert (await response.get_json())["assetType"] == "credit_alphanum12"


@pytest.mark.asyncio
async def test_create_asset_missing_fields(client):
    response = await client.post("/api/asset/create", json={"assetCode": "USD"})

    assert response.status_code == 400
    data = await response.get_json()
    assert data["error"] == "Asset code and issuer public key are required"
    assert data["fields"] == ["issuerPublicKey"]


@pytest.mark.asyncio
async def test_create_asset_invalid_issuer(client):
    response = await client.post("/api/asset/create", json={"assetCode": "USD", "issuerPublicKey": "GBAD"})

    assert response.status_code == 500
    assert (await response.get_json())["code"] == "invalid_asset"


@pytest.mark.asyncio
async def test_trust_missing_fields(client, mock_ledger):
    response = await client.post("/api/asset/trust", json={"secretKey": Keypair.random().secret})

    assert response.status_code == 400
    assert (await response.get_json())["fields"] == ["assetCode", "issuerPublicKey"]
    mock_ledger.load_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_trust_delegates(client, app):
    app.transaction_workflow.establish_trust = AsyncMock(return_value={"hash": "e" * 64})
    secret = Keypair.random().secret
    issuer = Keypair.random().public_key

    response = await client.post("/api/asset/trust", json={
        "secretKey": secret, "assetCode": "USD", "issuerPublicKey": issuer, "limit": "1000",
    })

    assert response.status_code == 200
    app.transaction_workflow.establish_trust.assert_awaited_once_with(secret, "USD", issuer, limit="1000")


@pytest.mark.asyncio
async def test_trust_invalid_secret(client, mock_ledger):
    response = await client.post("/api/asset/trust", json={
        "secretKey": "SBROKEN", "assetCode": "USD", "issuerPublicKey": Keypair.random().public_key,
    })

    assert response.status_code == 500
    assert (await response.get_json())["code"] == "invalid_secret"
    mock_ledger.load_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_issue_missing_fields(client, mock_ledger):
    response = await client.post("/api/asset/issue", json={"issuerSecretKey": Keypair.random().secret})

    assert response.status_code == 400
    assert (await response.get_json())["fields"] == ["destinationPublicKey", "assetCode", "amount"]
    mock_ledger.load_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_issue_delegates(client, app):
    app.transaction_workflow.issue_asset = AsyncMock(return_value={"hash": "f" * 64})
    secret = Keypair.random().secret
    destination = Keypair.random().public_key

    response = await client.post("/api/asset/issue", json={
        "issuerSecretKey": secret, "destinationPublicKey": destination, "assetCode": "USD", "amount": "100",
    })

    assert response.status_code == 200
    app.transaction_workflow.issue_asset.assert_awaited_once_with(secret, destination, "USD", "100")


@pytest.mark.asyncio
async def test_trust_rejects_non_numeric_limit(client, mock_ledger):
    response = await client.post("/api/asset/trust", json={
        "secretKey": Keypair.random().secret,
        "assetCode": "USD",
        "issuerPublicKey": Keypair.random().public_key,
        "limit": "lots",
    })

    assert response.status_code == 500
    data = await response.get_json()
    assert data["code"] == "transaction_build_error"
    assert data["field"] == "limit"
    mock_ledger.load_account.assert_not_awaited()


@pytest.mark.asyncio
async def test_issue_rejects_zero_amount(client, mock_ledger):
    response = await client.post("/api/asset/issue", json={
        "issuerSecretKey": Keypair.random().secret,
        "destinationPublicKey": Keypair.random().public_key,
        "assetCode": "USD",
        "amount": "0",
    })

    assert response.status_code == 500
    data = await response.get_json()
    assert data["code"] == "transaction_build_error"
    assert data["field"] == "amount"
    mock_ledger.load_account.assert_not_awaited()
