"""
Shared helpers for amount parsing and data table loading.
"""

from .amounts import parse_amount, amount_text, round_half_up, format_currency
from .json_utils import load_json_records

__all__ = [
    "parse_amount",
    "amount_text",
    "round_half_up",
    "format_currency",
    "load_json_records",
]
