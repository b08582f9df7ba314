"""Utility functions for networth."""

from networth.utils.date_parser import parse_date, to_datetime
from networth.utils.amount_parser import parse_amount
from networth.utils.formatting import format_currency, format_short_currency

__all__ = [
    "parse_date",
    "to_datetime",
    "parse_amount",
    "format_currency",
    "format_short_currency",
]
