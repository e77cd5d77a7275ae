"""Utility functions for sepapay."""

from sepapay.utils.date_parser import parse_date
from sepapay.utils.amount_parser import parse_amount, round_amount, to_decimal

__all__ = ["parse_date", "parse_amount", "round_amount", "to_decimal"]
