"""
Storage for the active account's keys.

Callers only see ``AccountStore``; the plaintext file backend mirrors what a
browser's local storage would hold and can be swapped for the in-memory one
(or an encrypted backend) without touching them.
"""

import json
import os
from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from services.models import AccountKeys


class AccountStore(ABC):
    @abstractmethod
    def load(self) -> Optional[AccountKeys]:
        ...

    @abstractmethod
    def save(self, keys: AccountKeys) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemoryAccountStore(AccountStore):
    def __init__(self):
        self._keys: Optional[AccountKeys] = None

    def load(self) -> Optional[AccountKeys]:
        return self._keys

    def save(self, keys: AccountKeys) -> None:
        self._keys = keys

    def clear(self) -> None:
        self._keys = None


class JsonFileAccountStore(AccountStore):
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[AccountKeys]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return AccountKeys(public_key=data["publicKey"], secret_key=data["secretKey"])
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable account file {self.path}: {e}")
            return None

    def save(self, keys: AccountKeys) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(keys.to_dict(), f)

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
