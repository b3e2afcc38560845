"""
Symbol selection. The exchange history mixes spot and perpetual markets;
position analysis is run on perpetuals by default.
"""

from typing import Iterable, Sequence

from roundtrip_core.contracts import Fill


def filter_symbols(fills: Iterable[Fill], patterns: Sequence[str]) -> list[Fill]:
    """Keep fills whose symbol contains any of *patterns* (case-insensitive).

    An empty *patterns* keeps everything.
    """
    if not patterns:
        return list(fills)
    wanted = [p.upper() for p in patterns]
    return [f for f in fills if any(p in f.symbol.upper() for p in wanted)]
