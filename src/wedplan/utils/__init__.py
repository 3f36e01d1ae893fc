"""Utility functions for wedplan."""

from wedplan.utils.date_parser import parse_date
from wedplan.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_amount"]
