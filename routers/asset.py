from quart import Blueprint, current_app, jsonify

from routers.helpers import get_json_body, require_fields
from services.models import asset_to_dict
from services.transaction_builder import create_custom_asset

blueprint = Blueprint('asset', __name__, url_prefix='/api')


@blueprint.route('/asset/create', methods=('POST',))
async def create_asset():
    # Describes the asset only, nothing is sent to the network
    data = await get_json_body()
    asset_code, issuer_public_key = require_fields(
        data, 'assetCode', 'issuerPublicKey',
        message='Asset code and issuer public key are required',
    )
    asset = create_custom_asset(asset_code, issuer_public_key)
    return jsonify(asset_to_dict(asset))


@blueprint.route('/asset/trust', methods=('POST',))
async def establish_trust():
    data = await get_json_body()
    secret_key, asset_code, issuer_public_key = require_fields(
        data, 'secretKey', 'assetCode', 'issuerPublicKey'
    )
    result = await current_app.transaction_workflow.establish_trust(
        secret_key, asset_code, issuer_public_key, limit=data.get('limit')
    )
    return jsonify(result)


@blueprint.route('/asset/issue', methods=('POST',))
async def issue_asset():
    data = await get_json_body()
    issuer_secret_key, destination_public_key, asset_code, amount = require_fields(
        data, 'issuerSecretKey', 'destinationPublicKey', 'assetCode', 'amount'
    )
    result = await current_app.transaction_workflow.issue_asset(
        issuer_secret_key, destination_public_key, asset_code, amount
    )
    return jsonify(result)
