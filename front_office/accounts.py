"""
Account Management Module

Bank accounts, their balance rules and the codec for the bank data file.
Balances use Decimal with two places; floats are converted through str.

Bank file line: <account number> <balance> <Savings|Current>
"""

from decimal import Decimal, Inexact, InvalidOperation, ROUND_HALF_UP, localcontext
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from .persistence import MalformedRecord, RecordCodec
from .results import FailureKind, OperationError


CENT = Decimal("0.01")


class AccountKind(Enum):
    """Account types as written to the bank file"""
    SAVINGS = "Savings"
    CURRENT = "Current"
    
    @property
    def label(self) -> str:
        return self.value
    
    @classmethod
    def from_label(cls, label: str) -> Optional["AccountKind"]:
        for kind in cls:
            if kind.label == label:
                return kind
        return None


def to_amount(value: Any) -> Decimal:
    """
    Convert user input to a two-place Decimal.
    
    Raises OperationError(INVALID_AMOUNT) for anything that is not a
    finite number.
    """
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value).strip())
        if value.is_finite():
            return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        pass
    raise OperationError(FailureKind.INVALID_AMOUNT, f"Invalid amount: {value!r}")


def format_amount(amount: Decimal) -> str:
    return format(amount.quantize(CENT, rounding=ROUND_HALF_UP), "f")


def _exact_sum(balance: Decimal, change: Decimal) -> Decimal:
    """
    balance + change to the cent, or OperationError(INVALID_AMOUNT) when
    the result needs more digits than the decimal context carries
    """
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        try:
            return (balance + change).quantize(CENT)
        except (Inexact, InvalidOperation):
            raise OperationError(FailureKind.INVALID_AMOUNT, "Amount exceeds the supported balance precision.")


@dataclass
class Account:
    """Bank account; the number is fixed, the balance moves"""
    number: str
    kind: AccountKind
    balance: Decimal = Decimal("0.00")
    
    def __post_init__(self):
        if not self.number or any(ch.isspace() for ch in self.number):
            raise ValueError(f"Account number must be non-empty without whitespace: {self.number!r}")
        self.balance = to_amount(self.balance)
    
    @property
    def identifier(self) -> str:
        return self.number
    
    def deposit(self, amount: Any) -> Decimal:
        """Add a positive amount; returns the new balance"""
        amount = to_amount(amount)
        if amount <= 0:
            raise OperationError(FailureKind.INVALID_AMOUNT, "Deposit amount must be positive.")
        self.balance = _exact_sum(self.balance, amount)
        return self.balance
    
    def withdraw(self, amount: Any) -> Decimal:
        """Take out a positive amount no larger than the balance"""
        amount = to_amount(amount)
        if amount <= 0:
            raise OperationError(FailureKind.INVALID_AMOUNT, "Withdraw amount must be positive.")
        if amount > self.balance:
            raise OperationError(
                FailureKind.INSUFFICIENT_FUNDS,
                f"Insufficient funds: balance {format_amount(self.balance)}, requested {format_amount(amount)}."
            )
        self.balance = _exact_sum(self.balance, -amount)
        return self.balance
    
    def details(self) -> List[str]:
        return [
            f"Account Number: {self.number}",
            f"Balance: {format_amount(self.balance)}",
            f"Account Type: {self.kind.label}",
        ]


class AccountCodec(RecordCodec[Account]):
    field_count = 3
    
    def encode(self, account: Account) -> List[str]:
        return [account.number, format_amount(account.balance), account.kind.label]
    
    def decode(self, fields: List[str]) -> Optional[Account]:
        number, balance_text, label = fields
        try:
            balance = Decimal(balance_text)
        except InvalidOperation:
            raise MalformedRecord(f"invalid balance {balance_text!r}")
        if not balance.is_finite():
            raise MalformedRecord(f"invalid balance {balance_text!r}")
        if balance < 0:
            raise OperationError(
                FailureKind.INVALID_AMOUNT, f"Account {number} has a negative balance {balance_text}."
            )
        
        kind = AccountKind.from_label(label)
        if kind is None:
            return None
        return Account(number=number, kind=kind, balance=balance)
    
    def identifier(self, account: Account) -> str:
        return account.number
