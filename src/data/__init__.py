"""
Data boundary: load raw fill records, normalize to Fill, select symbols.

Depends on roundtrip_core.contracts for Fill; no dependency from roundtrip_core back to data.
"""

from data.filters import filter_symbols
from data.normalize import FillNormalizationError, normalize_fill, normalize_fills
from data.source import FetchResult, FillSource, FillSourceError, JsonFileFillSource, StaticFillSource

__all__ = [
    "FetchResult",
    "FillNormalizationError",
    "FillSource",
    "FillSourceError",
    "filter_symbols",
    "JsonFileFillSource",
    "normalize_fill",
    "normalize_fills",
    "StaticFillSource",
]
