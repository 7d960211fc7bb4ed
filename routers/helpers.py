from typing import Any, Dict, Optional, Tuple

from loguru import logger
from quart import Quart, jsonify, request
from werkzeug.exceptions import HTTPException

from services.errors import PaymentGatewayError, ValidationError


async def get_json_body() -> Dict[str, Any]:
    data = await request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_fields(data: Dict[str, Any], *names: str, message: Optional[str] = None) -> Tuple[Any, ...]:
    """Presence check only; formats are left to the services."""
    missing = [name for name in names if data.get(name) in (None, "")]
    if missing:
        raise ValidationError.missing(missing, message)
    return tuple(data[name] for name in names)


def register_error_handlers(app: Quart):
    @app.errorhandler(PaymentGatewayError)
    async def handle_gateway_error(error: PaymentGatewayError):
        if error.status_code >= 500:
            logger.warning(f"{request.method} {request.path} failed: {error.code} {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    async def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description, "code": "http_error"}), error.code

    @app.errorhandler(Exception)
    async def handle_unexpected_error(error: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({"error": str(error), "code": "internal_error"}), 500
