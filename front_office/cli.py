"""
Console Menus

Numbered menus for the hotel and bank applications. They only collect
input, call the managers and print results; end of input exits the menu.
"""

import sys
from typing import Callable, List, Optional

from .accounts import AccountKind
from .bank import Bank, create_bank
from .config import get_config
from .hotel import Hotel, create_hotel
from .logging_config import setup_logging
from .results import OperationResult
from .rooms import Customer, RoomKind


ROOM_KIND_CHOICES = {1: RoomKind.SINGLE, 2: RoomKind.DOUBLE, 3: RoomKind.SUITE}
ACCOUNT_KIND_CHOICES = {1: AccountKind.SAVINGS, 2: AccountKind.CURRENT}


class EndOfInput(Exception):
    pass


class Console:
    """Prompting helpers over injectable input/output functions"""
    
    def __init__(self, input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self._input = input_func
        self.output = output
    
    def ask(self, prompt: str) -> str:
        try:
            return self._input(prompt).strip()
        except EOFError:
            raise EndOfInput()
    
    def ask_token(self, prompt: str) -> str:
        """A single word; re-prompts on empty input or embedded spaces"""
        while True:
            value = self.ask(prompt)
            if value and len(value.split()) == 1:
                return value
            self.output("Please enter a single word without spaces.")
    
    def ask_int(self, prompt: str) -> int:
        while True:
            value = self.ask(prompt)
            try:
                return int(value)
            except ValueError:
                self.output("Please enter a whole number.")
    
    def report(self, result: OperationResult, success: str) -> None:
        if result.is_ok:
            self.output(success)
            if not result.persisted:
                self.output("Warning: changes could not be saved to disk.")
        else:
            self.output(f"Error: {result.failure}")


def run_hotel_menu(hotel: Hotel, console: Optional[Console] = None) -> None:
    console = console or Console()
    while True:
        console.output("\nHotel Booking System")
        console.output("1. Add Room")
        console.output("2. Book Room")
        console.output("3. Cancel Booking")
        console.output("4. Check Room Availability")
        console.output("5. Exit")
        try:
            choice = console.ask_int("Enter your choice: ")
            
            if choice == 1:
                number = console.ask_int("Enter Room Number: ")
                kind = ROOM_KIND_CHOICES.get(
                    console.ask_int("Select Room Type (1 for Single, 2 for Double, 3 for Suite): ")
                )
                if kind is None:
                    console.output("Invalid room type selected.")
                    continue
                console.report(hotel.add_room(number, kind), f"{kind.display_name} {number} added successfully.")
            
            elif choice == 2:
                number = console.ask_int("Enter Room Number to book: ")
                customer_id = console.ask_token("Enter Customer ID: ")
                name = console.ask("Enter Customer Name: ")
                if not name:
                    console.output("Customer name must not be empty.")
                    continue
                booking_id = console.ask_token("Enter Booking ID: ")
                result = hotel.book_room(number, Customer(customer_id, name), booking_id)
                console.report(result, "Room booked successfully.")
            
            elif choice == 3:
                booking_id = console.ask_token("Enter Booking ID to cancel: ")
                console.report(hotel.cancel_booking(booking_id), "Booking cancelled successfully.")
            
            elif choice == 4:
                lines = hotel.check_availability()
                if not lines:
                    console.output("No rooms registered.")
                for line in lines:
                    console.output(line)
            
            elif choice == 5:
                console.output("Exiting the system...")
                return
            
            else:
                console.output("Invalid choice! Please choose again.")
        except EndOfInput:
            return


def run_bank_menu(bank: Bank, console: Optional[Console] = None) -> None:
    console = console or Console()
    while True:
        console.output("\nBanking System")
        console.output("1. Create Account")
        console.output("2. Deposit")
        console.output("3. Withdraw")
        console.output("4. Transfer")
        console.output("5. Show Account Details")
        console.output("6. Exit")
        try:
            choice = console.ask_int("Enter your choice: ")
            
            if choice == 1:
                number = console.ask_token("Enter Account Number: ")
                balance = console.ask("Enter Initial Balance: ")
                kind = ACCOUNT_KIND_CHOICES.get(
                    console.ask_int("Select Account Type (1 for Savings, 2 for Current): ")
                )
                if kind is None:
                    console.output("Invalid account type selected.")
                    continue
                console.report(
                    bank.create_account(number, kind, balance),
                    f"{kind.label} Account created successfully."
                )
            
            elif choice == 2:
                number = console.ask_token("Enter Account Number: ")
                result = bank.deposit(number, console.ask("Enter Amount to Deposit: "))
                console.report(result, f"New balance: {result.value}")
            
            elif choice == 3:
                number = console.ask_token("Enter Account Number: ")
                result = bank.withdraw(number, console.ask("Enter Amount to Withdraw: "))
                console.report(result, f"New balance: {result.value}")
            
            elif choice == 4:
                from_number = console.ask_token("Enter From Account Number: ")
                to_number = console.ask_token("Enter To Account Number: ")
                result = bank.transfer(from_number, to_number, console.ask("Enter Amount to Transfer: "))
                console.report(result, f"Transferred {result.value} from {from_number} to {to_number}.")
            
            elif choice == 5:
                result = bank.account_details(console.ask_token("Enter Account Number: "))
                if result.is_ok:
                    for line in result.value:
                        console.output(line)
                else:
                    console.output(f"Error: {result.failure}")
            
            elif choice == 6:
                console.output("Exiting the system...")
                return
            
            else:
                console.output("Invalid choice! Please choose again.")
        except EndOfInput:
            return


USAGE = "usage: front-office {hotel|bank}"


def main(argv: Optional[List[str]] = None) -> int:
    """Run one of the applications; returns the process exit code"""
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1 or argv[0] not in ("hotel", "bank"):
        print(USAGE, file=sys.stderr)
        return 2
    
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)
    
    if argv[0] == "hotel":
        with create_hotel(config) as hotel:
            run_hotel_menu(hotel)
    else:
        with create_bank(config) as bank:
            run_bank_menu(bank)
    return 0
