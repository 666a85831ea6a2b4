"""Utility functions for quickledger."""

from quickledger.utils.date_parser import parse_date, to_date_part
from quickledger.utils.amount_parser import extract_amount
from quickledger.utils.similarity import edit_similarity

__all__ = ["parse_date", "to_date_part", "extract_amount", "edit_similarity"]
