"""
stylish-mapped: a "stylish" terminal reporter for ESLint-style lint results
that remaps diagnostic positions through JavaScript source maps.
"""

from stylish_mapped.formatter import StylishFormatter, format_results, pluralize, summarize
from stylish_mapped.resolver import PositionResolver, SourceMapCache

__version__ = "1.0.0"

__all__ = [
    "StylishFormatter",
    "PositionResolver",
    "SourceMapCache",
    "format_results",
    "pluralize",
    "summarize",
]
