from quart import Blueprint, current_app, jsonify

from routers.helpers import get_json_body, require_fields

blueprint = Blueprint('account', __name__, url_prefix='/api')


@blueprint.route('/account/create', methods=('POST',))
async def create_account():
    keys = await current_app.account_service.create_account()
    return jsonify(keys.to_dict())


@blueprint.route('/account/fund', methods=('POST',))
async def fund_account():
    data = await get_json_body()
    public_key, = require_fields(data, 'publicKey', message='Public key is required')
    result = await current_app.account_service.fund_account(public_key)
    return jsonify(result)


@blueprint.route('/account/import', methods=('POST',))
async def import_account():
    data = await get_json_body()
    secret_key, = require_fields(data, 'secretKey', message='Secret key is required')
    keys = current_app.account_service.import_account(secret_key)
    return jsonify(keys.to_dict())


@blueprint.route('/account/<public_key>', methods=('GET',))
async def account_details(public_key):
    details = await current_app.account_service.get_account_details(public_key)
    return jsonify(details.to_dict())
