"""Utility functions for ledgerbook."""

from ledgerbook.utils.amount_parser import parse_amount

__all__ = ["parse_amount"]
