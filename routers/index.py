from quart import Blueprint, current_app, jsonify

blueprint = Blueprint('index', __name__)


@blueprint.route('/health')
@blueprint.route('/api/health')
async def health():
    return jsonify({
        'status': 'ok',
        'network': current_app.transaction_workflow.network_passphrase,
        'horizon': current_app.ledger_client.horizon_url,
    })
