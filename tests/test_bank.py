"""
Test suite for bank module

Tests account creation, deposits, withdrawals, atomic transfers and the
bank data file round-trip.
"""

import logging
from decimal import Decimal

import pytest

from front_office.accounts import AccountKind
from front_office.bank import Bank, create_bank
from front_office.config import FrontOfficeConfig
from front_office.results import FailureKind
from front_office.storage import InMemoryStorage


class TestBank:
    """Test counter operations"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.storage = InMemoryStorage()
        self.bank = Bank(self.storage)
        self.bank.create_account("A100", AccountKind.SAVINGS, 50.0)
        self.bank.create_account("B200", AccountKind.CURRENT, "10")
    
    def balance(self, number):
        return self.bank.find_account(number).value.balance
    
    def test_create_account_is_saved(self):
        """Test new accounts are written immediately"""
        assert self.storage.lines == ["A100 50.00 Savings", "B200 10.00 Current"]
    
    def test_create_duplicate_account(self):
        """Test account numbers stay unique"""
        result = self.bank.create_account("A100", AccountKind.CURRENT, 0)
        
        assert result.kind == FailureKind.DUPLICATE_IDENTIFIER
        assert len(self.bank.accounts) == 2
    
    def test_create_with_negative_balance(self):
        """Test opening balances cannot be negative"""
        result = self.bank.create_account("C300", AccountKind.SAVINGS, "-1")
        
        assert result.kind == FailureKind.INVALID_AMOUNT
        assert not self.bank.find_account("C300").is_ok
    
    def test_create_with_default_balance(self):
        """Test accounts open at zero by default"""
        result = self.bank.create_account("C300", AccountKind.CURRENT)
        
        assert result.value.balance == Decimal("0.00")
    
    def test_withdraw_scenario(self):
        """Test withdrawing 30 twice from a balance of 50"""
        first = self.bank.withdraw("A100", 30)
        assert first.is_ok
        assert first.value == Decimal("20.00")
        
        second = self.bank.withdraw("A100", 30)
        assert second.kind == FailureKind.INSUFFICIENT_FUNDS
        assert self.balance("A100") == Decimal("20.00")
    
    @pytest.mark.parametrize("amount", [0, -1, "-0.50"])
    def test_non_positive_deposit(self, amount):
        """Test invalid deposits leave the balance and are not saved"""
        writes = self.storage.write_count
        
        result = self.bank.deposit("A100", amount)
        
        assert result.kind == FailureKind.INVALID_AMOUNT
        assert self.balance("A100") == Decimal("50.00")
        assert self.storage.write_count == writes
    
    def test_deposit(self):
        """Test a deposit updates balance and file"""
        result = self.bank.deposit("B200", "5.25")
        
        assert result.value == Decimal("15.25")
        assert self.storage.lines[1] == "B200 15.25 Current"
    
    def test_unknown_account(self):
        """Test operations on missing accounts report NOT_FOUND"""
        assert self.bank.deposit("X", 1).kind == FailureKind.NOT_FOUND
        assert self.bank.withdraw("X", 1).kind == FailureKind.NOT_FOUND
        assert self.bank.account_details("X").kind == FailureKind.NOT_FOUND
    
    def test_invalid_amount_text(self):
        """Test non-numeric amounts"""
        assert self.bank.deposit("A100", "ten").kind == FailureKind.INVALID_AMOUNT
        assert self.bank.withdraw("A100", "").kind == FailureKind.INVALID_AMOUNT
    
    def test_account_details(self):
        """Test display lines"""
        result = self.bank.account_details("B200")
        
        assert result.value == [
            "Account Number: B200",
            "Balance: 10.00",
            "Account Type: Current",
        ]


class TestTransfer:
    """Test transfers move money all-or-nothing"""
    
    def setup_method(self):
        """Set up test fixtures"""
        self.storage = InMemoryStorage()
        self.bank = Bank(self.storage)
        self.bank.create_account("A", AccountKind.SAVINGS, "100")
        self.bank.create_account("B", AccountKind.CURRENT, "5")
    
    def balances(self):
        return [account.balance for account in self.bank.accounts]
    
    def test_transfer(self):
        """Test a covered transfer"""
        result = self.bank.transfer("A", "B", "40")
        
        assert result.is_ok
        assert result.value == Decimal("40.00")
        assert self.balances() == [Decimal("60.00"), Decimal("45.00")]
        assert self.storage.lines == ["A 60.00 Savings", "B 45.00 Current"]
    
    def test_insufficient_funds_changes_nothing(self):
        """Test neither balance moves when the source cannot cover"""
        writes = self.storage.write_count
        
        result = self.bank.transfer("B", "A", "6")
        
        assert result.kind == FailureKind.INSUFFICIENT_FUNDS
        assert self.balances() == [Decimal("100.00"), Decimal("5.00")]
        assert self.storage.write_count == writes
    
    def test_missing_destination_changes_nothing(self):
        """Test an unknown destination does not debit the source"""
        result = self.bank.transfer("A", "Z", "10")
        
        assert result.kind == FailureKind.NOT_FOUND
        assert self.balances() == [Decimal("100.00"), Decimal("5.00")]
    
    def test_missing_source(self):
        """Test an unknown source"""
        assert self.bank.transfer("Z", "A", "10").kind == FailureKind.NOT_FOUND
    
    @pytest.mark.parametrize("amount", [0, "-5", "abc"])
    def test_invalid_amount(self, amount):
        """Test non-positive or non-numeric transfer amounts"""
        result = self.bank.transfer("A", "B", amount)
        
        assert result.kind == FailureKind.INVALID_AMOUNT
        assert self.balances() == [Decimal("100.00"), Decimal("5.00")]
    
    def test_transfer_to_same_account(self):
        """Test a self transfer leaves the balance unchanged"""
        result = self.bank.transfer("A", "A", "30")
        
        assert result.is_ok
        assert self.balances()[0] == Decimal("100.00")


class TestBankPersistence:
    """Test loading and saving the bank data file"""
    
    def test_negative_stored_balance_is_skipped(self, caplog):
        """Test a record with a negative balance is skipped with a warning"""
        storage = InMemoryStorage(["A1 -5 Savings", "A2 5 Current"])
        
        with caplog.at_level(logging.WARNING, logger="front_office"):
            bank = Bank(storage)
        
        assert [account.number for account in bank.accounts] == ["A2"]
        assert "negative balance" in caplog.text
    
    def test_load_existing_accounts(self):
        """Test accounts from a legacy file"""
        storage = InMemoryStorage(["A100 50 Savings", "B200 12.5 Current", "C300 1 Fixed"])
        bank = Bank(storage)
        
        assert [(a.number, a.balance, a.kind) for a in bank.accounts] == [
            ("A100", Decimal("50.00"), AccountKind.SAVINGS),
            ("B200", Decimal("12.50"), AccountKind.CURRENT),
        ]
    
    def test_autosave_off(self):
        """Test changes are written on close only"""
        storage = InMemoryStorage()
        with Bank(storage, autosave=False) as bank:
            bank.create_account("A1", AccountKind.SAVINGS, "1")
            assert storage.write_count == 0
        
        assert storage.lines == ["A1 1.00 Savings"]
    
    def test_create_bank_from_config(self, tmp_path):
        """Test the factory and a restart against a real file"""
        config = FrontOfficeConfig(bank_file=str(tmp_path / "bank_data.txt"))
        bank = create_bank(config)
        bank.create_account("A100", AccountKind.SAVINGS, "50")
        bank.withdraw("A100", "30")
        
        reopened = create_bank(config)
        
        assert reopened.find_account("A100").value.balance == Decimal("20.00")
        assert (tmp_path / "bank_data.txt").read_text() == "A100 20.00 Savings\n"


class TestBalancePrecision:
    """Test balances that would outgrow the decimal context"""
    
    def test_oversized_deposit_keeps_state_and_saves(self):
        """Test the deposit fails cleanly and the file can still be written"""
        storage = InMemoryStorage()
        bank = Bank(storage)
        bank.create_account("A1", AccountKind.SAVINGS, "9" * 26)
        
        result = bank.deposit("A1", "9" * 26)
        
        assert result.kind == FailureKind.INVALID_AMOUNT
        assert bank.find_account("A1").value.balance == Decimal("9" * 26)
        assert bank.close()
        assert storage.lines == [f"A1 {'9' * 26}.00 Savings"]
    
    def test_oversized_transfer_changes_nothing(self):
        """Test a transfer whose credit overflows rolls back the debit"""
        bank = Bank(InMemoryStorage())
        bank.create_account("A1", AccountKind.SAVINGS, "9" * 26)
        bank.create_account("A2", AccountKind.CURRENT, "9" * 26)
        
        result = bank.transfer("A1", "A2", "9" * 25)
        
        assert result.kind == FailureKind.INVALID_AMOUNT
        assert [account.balance for account in bank.accounts] == [Decimal("9" * 26)] * 2
