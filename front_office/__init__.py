"""
Front Office

Console record keeping for a hotel front desk and a bank counter.
Rooms, bookings and accounts live in memory and are persisted to flat,
whitespace-delimited text files.
"""

__version__ = "1.0.0"
