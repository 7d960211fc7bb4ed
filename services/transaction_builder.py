from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, Optional, Union

from loguru import logger
from stellar_sdk import Asset, Keypair, TransactionBuilder, TransactionEnvelope
from stellar_sdk.exceptions import (
    BaseHorizonError,
    ConnectionError as HorizonConnectionError,
    Ed25519SecretSeedInvalidError,
    MemoInvalidException,
    NotFoundError,
)

from services.errors import (
    AccountLoadError,
    InvalidAssetError,
    InvalidSecretError,
    MemoTooLongError,
    MissingIssuerError,
    SubmissionError,
    TransactionBuildError,
)
from services.ledger_client import LedgerClient
from services.models import ChangeTrustOp, PaymentOp

NATIVE_ASSET_CODE = "XLM"
TEXT_MEMO_MAX_BYTES = 28

Operation = Union[PaymentOp, ChangeTrustOp]


def keypair_from_secret(secret_key: str) -> Keypair:
    try:
        return Keypair.from_secret(secret_key)
    except (Ed25519SecretSeedInvalidError, ValueError, TypeError) as e:
        raise InvalidSecretError("Invalid secret key") from e


def create_custom_asset(asset_code: str, issuer_public_key: str) -> Asset:
    try:
        return Asset(asset_code, issuer_public_key)
    except (ValueError, AttributeError) as e:
        raise InvalidAssetError(
            f"Failed to create custom asset: {e}", asset_code=asset_code, issuer=issuer_public_key
        ) from e


def resolve_asset(asset_code: Optional[str], issuer: Optional[str] = None) -> Asset:
    """
    XLM (any case) is always the native asset and any issuer is ignored;
    every other code needs an issuer.
    """
    if asset_code is not None and not isinstance(asset_code, str):
        raise InvalidAssetError(f"Asset code must be a string, got {asset_code!r}", asset_code=asset_code)
    if not asset_code or asset_code.upper() == NATIVE_ASSET_CODE:
        return Asset.native()
    if not issuer:
        raise MissingIssuerError("Issuer is required for non-XLM assets", asset_code=asset_code)
    return create_custom_asset(asset_code, issuer)


def parse_amount(value, field: str = "amount", allow_zero: bool = False) -> str:
    """
    Amounts must be positive decimals; trust limits may also be zero, which
    removes the trustline.
    """
    if isinstance(value, bool):
        raise TransactionBuildError(f"Invalid {field}: {value!r}", field=field)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise TransactionBuildError(f"Invalid {field}: {value!r}", field=field) from e
    if not number.is_finite() or number < 0 or (number == 0 and not allow_zero):
        raise TransactionBuildError(f"Invalid {field}: {value!r} must be a positive number", field=field)
    return str(value).strip()


def _remote_failure(e: BaseHorizonError) -> Dict[str, Any]:
    extras = getattr(e, "extras", None) or {}
    return {
        "remote_status": getattr(e, "status", None),
        "result_codes": extras.get("result_codes"),
        "detail": getattr(e, "detail", None) or getattr(e, "title", None),
    }


class TransactionWorkflow:
    """
    Builds, signs and submits one transaction per call. Inputs are checked
    before the source account is loaded; the ledger decides whether the
    operations apply, atomically and in order.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        network_passphrase: str,
        base_fee: int = 100,
        timeout: int = 30,
    ):
        self.ledger = ledger
        self.network_passphrase = network_passphrase
        self.base_fee = base_fee
        self.timeout = timeout

    async def build(
        self,
        source_keypair: Keypair,
        operations: Iterable[Operation],
        memo: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> TransactionEnvelope:
        operations = list(operations)
        if not operations:
            raise TransactionBuildError("Transaction needs at least one operation")

        try:
            source_account = await self.ledger.load_account(source_keypair.public_key)
        except NotFoundError as e:
            raise AccountLoadError(
                f"Source account {source_keypair.public_key} not found", account=source_keypair.public_key
            ) from e
        except (BaseHorizonError, HorizonConnectionError) as e:
            logger.warning(f"Failed to load account {source_keypair.public_key}: {e}")
            raise AccountLoadError(
                f"Failed to load account: {e}", account=source_keypair.public_key
            ) from e

        builder = TransactionBuilder(
            source_account=source_account,
            network_passphrase=self.network_passphrase,
            base_fee=self.base_fee,
        )
        if memo:
            try:
                builder.add_text_memo(str(memo))
            except MemoInvalidException as e:
                raise MemoTooLongError(str(e), max_bytes=TEXT_MEMO_MAX_BYTES) from e

        try:
            for operation in operations:
                if isinstance(operation, PaymentOp):
                    builder.append_payment_op(
                        destination=operation.destination,
                        asset=operation.asset,
                        amount=operation.amount,
                    )
                elif isinstance(operation, ChangeTrustOp):
                    builder.append_change_trust_op(asset=operation.asset, limit=operation.limit)
                else:
                    raise TransactionBuildError(f"Unsupported operation {operation!r}")
            envelope = builder.set_timeout(timeout if timeout is not None else self.timeout).build()
        except TransactionBuildError:
            raise
        except (ValueError, ArithmeticError) as e:
            raise TransactionBuildError(f"Failed to build transaction: {e}") from e

        envelope.sign(source_keypair)
        return envelope

    async def submit(self, envelope: TransactionEnvelope) -> Dict[str, Any]:
        try:
            return await self.ledger.submit(envelope)
        except BaseHorizonError as e:
            failure = _remote_failure(e)
            logger.warning(f"Transaction {envelope.hash_hex()} rejected: {failure}")
            message = failure["detail"] or str(e)
            if failure["result_codes"]:
                message = f"{message} {failure['result_codes']}"
            raise SubmissionError(message, **failure) from e
        except HorizonConnectionError as e:
            logger.warning(f"Transaction {envelope.hash_hex()} not submitted: {e}")
            raise SubmissionError(f"Failed to submit transaction: {e}") from e

    async def build_and_submit(
        self,
        source_keypair: Keypair,
        operations: Iterable[Operation],
        memo: Optional[str] = None,
        timeout: Optional[int] = None,
    ) -> Dict[str, Any]:
        envelope = await self.build(source_keypair, operations, memo=memo, timeout=timeout)
        return await self.submit(envelope)

    async def make_payment(
        self,
        sender_secret_key: str,
        receiver_public_key: str,
        amount,
        asset: Optional[str] = NATIVE_ASSET_CODE,
        issuer: Optional[str] = None,
        memo: Optional[str] = None,
    ) -> Dict[str, Any]:
        keypair = keypair_from_secret(sender_secret_key)
        payment = PaymentOp(
            destination=receiver_public_key,
            asset=resolve_asset(asset, issuer),
            amount=parse_amount(amount),
        )
        return await self.build_and_submit(keypair, [payment], memo=memo)

    async def establish_trust(
        self,
        secret_key: str,
        asset_code: str,
        issuer_public_key: str,
        limit: Optional[str] = None,
    ) -> Dict[str, Any]:
        keypair = keypair_from_secret(secret_key)
        asset = create_custom_asset(asset_code, issuer_public_key)
        trust = ChangeTrustOp(asset=asset, limit=parse_amount(limit, "limit", allow_zero=True) if limit is not None else None)
        return await self.build_and_submit(keypair, [trust])

    async def issue_asset(
        self,
        issuer_secret_key: str,
        destination_public_key: str,
        asset_code: str,
        amount,
    ) -> Dict[str, Any]:
        """Issuance is a payment of the issuer's own asset."""
        issuer_keypair = keypair_from_secret(issuer_secret_key)
        asset = create_custom_asset(asset_code, issuer_keypair.public_key)
        payment = PaymentOp(destination=destination_public_key, asset=asset, amount=parse_amount(amount))
        return await self.build_and_submit(issuer_keypair, [payment])
