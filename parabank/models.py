"""Typed views of ParaBank data.

JSON coming back from the bank is decoded through the pydantic models below,
so a renamed or missing field fails loudly as ``SchemaViolationError`` at the
API boundary instead of surfacing later as an unrelated ``KeyError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from parabank.errors import SchemaViolationError

T = TypeVar("T")

# (type, description) of the two records a transfer books
TRANSFER_SENT = ("Debit", "Funds Transfer Sent")
TRANSFER_RECEIVED = ("Credit", "Funds Transfer Received")


class AccountType(str, Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"

    @property
    def code(self) -> int:
        """Numeric code the bank expects in ``newAccountType`` and the UI ``<select>``."""
        return _ACCOUNT_TYPE_CODES[self]


_ACCOUNT_TYPE_CODES = {AccountType.CHECKING: 0, AccountType.SAVINGS: 1}


class _BankModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Account(_BankModel):
    id: int
    customer_id: int = Field(alias="customerId")
    type: str
    balance: Decimal


class Transaction(_BankModel):
    id: int
    account_id: int = Field(alias="accountId")
    type: str
    date: datetime
    amount: Decimal
    description: str


def decode(target: Union[Type[T], Any], payload: Any, what: str) -> T:
    """Validate ``payload`` against ``target`` (a model class or a typing form like ``List[Account]``)."""
    try:
        return TypeAdapter(target).validate_python(payload)
    except ValidationError as e:
        raise SchemaViolationError(f"Unexpected {what} payload: {e}") from e


def decode_accounts(payload: Any) -> List[Account]:
    return decode(List[Account], payload, "account list")


def decode_transactions(payload: Any) -> List[Transaction]:
    return decode(List[Transaction], payload, "transaction list")


@dataclass(frozen=True)
class LoginResult:
    """Identifiers discovered by an API-level login; ``None`` means unknown."""

    customer_id: Optional[int] = None
    account_id: Optional[int] = None

    @property
    def complete(self) -> bool:
        return self.customer_id is not None and self.account_id is not None


@dataclass(frozen=True)
class IdentityRecord:
    """A freshly registered user correlated with its server-assigned IDs."""

    username: str
    password: str
    customer_id: int
    account_id: int


@dataclass(frozen=True)
class CreatedAccount:
    """A second account was opened; transfers go between two accounts."""

    source_account_id: int
    account_id: int

    @property
    def destination_account_id(self) -> int:
        return self.account_id

    @property
    def self_transfer(self) -> bool:
        return False

    @property
    def destination_leg(self) -> Tuple[str, str]:
        return TRANSFER_RECEIVED


@dataclass(frozen=True)
class FallbackSelfTransfer:
    """No second account could be opened; transfers go back into the source."""

    source_account_id: int
    reason: str

    @property
    def destination_account_id(self) -> int:
        return self.source_account_id

    @property
    def self_transfer(self) -> bool:
        return True

    @property
    def destination_leg(self) -> Tuple[str, str]:
        """Both records land on the source; the sent one is what tells a self-transfer apart."""
        return TRANSFER_SENT


TransferTarget = Union[CreatedAccount, FallbackSelfTransfer]


@dataclass(frozen=True)
class Scenario:
    """Everything a test needs after setup: who the user is and where money can move."""

    identity: IdentityRecord
    session_cookie: str
    target: Optional[TransferTarget] = None
    intercepted: bool = True

    @property
    def from_account_id(self) -> int:
        return self.identity.account_id

    @property
    def to_account_id(self) -> int:
        if self.target is None:
            return self.identity.account_id
        return self.target.destination_account_id
