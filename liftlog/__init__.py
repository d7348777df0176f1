"""
Gym log progression package.

This package parses freeform workout log entries from a Google Sheet
("10kg/12", "DB 15/12", "1.5 min", "25/10+failure SD"), groups them
into per-exercise sessions, flags personal records and exports
chart-ready progression data.
"""

__version__ = "0.1.0"
