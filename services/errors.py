"""
Closed set of errors raised by the account and transaction services.

Every error carries a stable ``code`` tag and structured ``context``. The HTTP
status is attached here but only read by the gateway when it renders the
error (see ``routers.helpers.register_error_handlers``).
"""

from typing import Any, Dict, Iterable, Optional


class PaymentGatewayError(Exception):
    code = "error"
    status_code = 500

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        data = {"error": self.message, "code": self.code}
        data.update(self.context)
        return data


class ValidationError(PaymentGatewayError):
    """Caller input rejected before any network call."""

    code = "validation_error"
    status_code = 400

    @classmethod
    def missing(cls, fields: Iterable[str], message: Optional[str] = None) -> "ValidationError":
        fields = list(fields)
        return cls(message or "Missing required parameters", fields=fields)


class InvalidSecretError(PaymentGatewayError):
    code = "invalid_secret"


class InvalidAssetError(PaymentGatewayError):
    code = "invalid_asset"


class MissingIssuerError(PaymentGatewayError):
    code = "missing_issuer"


class MemoTooLongError(PaymentGatewayError):
    code = "memo_too_long"


class TransactionBuildError(PaymentGatewayError):
    code = "transaction_build_error"


class FundingError(PaymentGatewayError):
    """
    Faucet funding failed. When raised from account creation the generated
    keypair is still valid and is carried in ``keys`` so funding can be
    retried for the same address.
    """

    code = "funding_error"

    def __init__(self, message: str, keys=None, **context: Any):
        super().__init__(message, **context)
        self.keys = keys

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.keys is not None:
            data.update(self.keys.to_dict())
        return data


class AccountLoadError(PaymentGatewayError):
    code = "account_load_error"


class AccountNotFoundError(PaymentGatewayError):
    code = "account_not_found"


class SubmissionError(PaymentGatewayError):
    code = "submission_error"
