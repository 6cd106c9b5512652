"""
Bank Management Module

Counter operations over the account store: create, deposit, withdraw,
transfer and account details. Every public operation returns an
OperationResult; the bank file is rewritten after each successful change
when autosave is on.
"""

from decimal import Decimal
from typing import Any, List, Optional

from .accounts import Account, AccountCodec, AccountKind, format_amount, to_amount
from .config import FrontOfficeConfig, get_config
from .entity_store import EntityStore
from .logging_config import get_logger, log_action
from .persistence import LoadReport, PersistenceAdapter
from .results import FailureKind, OperationError, OperationResult
from .storage import FlatFileStorage, StorageInterface


logger = get_logger("front_office.bank")


class Bank:
    """
    Manages accounts and balance movements
    """
    
    def __init__(self, storage: StorageInterface, autosave: bool = True):
        self.accounts: EntityStore[Account] = EntityStore("Account")
        self.autosave = autosave
        self._adapter = PersistenceAdapter(storage, AccountCodec(), "account")
        self.load()
    
    def __enter__(self) -> "Bank":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    def load(self) -> LoadReport:
        """Replace in-memory accounts with what storage holds"""
        self.accounts.clear()
        return self._adapter.load(self.accounts)
    
    def save(self) -> bool:
        return self._adapter.save(self.accounts)
    
    def close(self) -> bool:
        """Final save on shutdown"""
        return self.save()
    
    def _changed(self) -> bool:
        if self.autosave:
            return self.save()
        return True
    
    def _rejected(self, action: str, account_number: str, error: OperationError) -> OperationResult:
        log_action(
            logger, "info", f"{action} rejected: {error}",
            action=action, resource="account", entity_id=account_number,
            extra={"failure": error.kind.value}
        )
        return OperationResult.from_error(error)
    
    def create_account(
        self,
        number: str,
        kind: AccountKind,
        initial_balance: Any = Decimal("0.00")
    ) -> OperationResult[Account]:
        """
        Open an account
        
        Args:
            number: Account number, unique within the bank
            kind: Savings or Current
            initial_balance: Opening balance, must not be negative
            
        Returns:
            Result holding the created Account
        """
        try:
            if self.accounts.contains(number):
                raise OperationError(
                    FailureKind.DUPLICATE_IDENTIFIER, f"Account {number} already exists."
                )
            balance = to_amount(initial_balance)
            if balance < 0:
                raise OperationError(
                    FailureKind.INVALID_AMOUNT, "Initial balance must not be negative."
                )
        except OperationError as e:
            return self._rejected("create_account", number, e)
        
        account = self.accounts.add(Account(number=number, kind=kind, balance=balance))
        persisted = self._changed()
        log_action(
            logger, "info", f"{kind.label} account {number} created",
            action="create_account", resource="account", entity_id=number,
            extra={"balance": format_amount(balance)}
        )
        return OperationResult.ok(account, persisted=persisted)
    
    def find_account(self, number: str) -> OperationResult[Account]:
        try:
            return OperationResult.ok(self.accounts.get(number))
        except OperationError as e:
            return OperationResult.from_error(e)
    
    def account_details(self, number: str) -> OperationResult[List[str]]:
        """Number, balance and type lines for display"""
        result = self.find_account(number)
        if not result.is_ok:
            return result
        return OperationResult.ok(result.value.details())
    
    def deposit(self, number: str, amount: Any) -> OperationResult[Decimal]:
        """Deposit into an account; the result holds the new balance"""
        try:
            balance = self.accounts.get(number).deposit(amount)
        except OperationError as e:
            return self._rejected("deposit", number, e)
        
        persisted = self._changed()
        log_action(
            logger, "info", f"Deposit to {number}",
            action="deposit", resource="account", entity_id=number,
            extra={"amount": str(amount), "balance": format_amount(balance)}
        )
        return OperationResult.ok(balance, persisted=persisted)
    
    def withdraw(self, number: str, amount: Any) -> OperationResult[Decimal]:
        """Withdraw from an account; the result holds the new balance"""
        try:
            balance = self.accounts.get(number).withdraw(amount)
        except OperationError as e:
            return self._rejected("withdraw", number, e)
        
        persisted = self._changed()
        log_action(
            logger, "info", f"Withdrawal from {number}",
            action="withdraw", resource="account", entity_id=number,
            extra={"amount": str(amount), "balance": format_amount(balance)}
        )
        return OperationResult.ok(balance, persisted=persisted)
    
    def transfer(self, from_number: str, to_number: str, amount: Any) -> OperationResult[Decimal]:
        """
        Move money between two accounts as one operation.
        
        Both accounts must exist and the source must cover the amount
        before either balance changes; on any failure neither balance
        moves. The result holds the amount transferred.
        """
        try:
            source = self.accounts.get(from_number)
            target = self.accounts.get(to_number)
            value = to_amount(amount)
            with self.accounts.atomic():
                source.withdraw(value)
                target.deposit(value)
        except OperationError as e:
            return self._rejected("transfer", from_number, e)
        
        persisted = self._changed()
        log_action(
            logger, "info", f"Transfer {from_number} -> {to_number}",
            action="transfer", resource="account", entity_id=from_number,
            extra={"to_account": to_number, "amount": format_amount(value)}
        )
        return OperationResult.ok(value, persisted=persisted)


def create_bank(config: Optional[FrontOfficeConfig] = None) -> Bank:
    """Build a Bank backed by the configured bank data file"""
    config = config or get_config()
    return Bank(storage=FlatFileStorage(config.bank_file), autosave=config.autosave)
