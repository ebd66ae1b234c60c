"""Utility functions and constants."""

from project_diff_tool.utils.colors import DIFF_SYMBOLS
from project_diff_tool.utils.naming import format_description, nicify_delta_type

__all__ = [
    "DIFF_SYMBOLS",
    "format_description",
    "nicify_delta_type",
]
