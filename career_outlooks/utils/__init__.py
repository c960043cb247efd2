"""Shared helpers for text handling and timestamps."""

from .text import split_keywords, title_case
from .timestamps import utc_now

__all__ = ["split_keywords", "title_case", "utc_now"]
