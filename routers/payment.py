from quart import Blueprint, current_app, jsonify

from routers.helpers import get_json_body, require_fields

blueprint = Blueprint('payment', __name__, url_prefix='/api')


@blueprint.route('/payment', methods=('POST',))
async def make_payment():
    data = await get_json_body()
    sender_secret_key, receiver_public_key, amount = require_fields(
        data, 'senderSecretKey', 'receiverPublicKey', 'amount'
    )

    result = await current_app.transaction_workflow.make_payment(
        sender_secret_key,
        receiver_public_key,
        amount,
        asset=data.get('asset') or 'XLM',
        issuer=data.get('issuer'),
        memo=data.get('memo'),
    )
    return jsonify(result)
