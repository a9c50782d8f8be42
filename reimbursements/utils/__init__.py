"""Formatting helpers."""

from reimbursements.utils.format import format_currency, format_date, parse_currency

__all__ = ["format_currency", "format_date", "parse_currency"]
