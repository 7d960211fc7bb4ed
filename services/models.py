from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from stellar_sdk import Asset, Keypair


@dataclass(frozen=True)
class AccountKeys:
    public_key: str
    secret_key: str

    @classmethod
    def from_keypair(cls, keypair: Keypair) -> "AccountKeys":
        return cls(public_key=keypair.public_key, secret_key=keypair.secret)

    def to_dict(self) -> Dict[str, str]:
        return {"publicKey": self.public_key, "secretKey": self.secret_key}


@dataclass
class AccountDetails:
    balances: List[Dict[str, Any]] = field(default_factory=list)
    transactions: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"balances": self.balances, "transactions": self.transactions}


@dataclass(frozen=True)
class PaymentOp:
    destination: str
    asset: Asset
    amount: str


@dataclass(frozen=True)
class ChangeTrustOp:
    asset: Asset
    limit: Optional[str] = None


def asset_to_dict(asset: Asset) -> Dict[str, Optional[str]]:
    return {"assetCode": asset.code, "issuer": asset.issuer, "assetType": asset.type}
