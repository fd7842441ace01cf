"""
Row filter/sort engine.

Both functions return new index lists into the canonical row list and never
reorder the rows themselves.
"""

from typing import List, Sequence

from netutil.core.models import InterfaceRow, SortColumn


def filter_indices(rows: Sequence[InterfaceRow], query: str) -> List[int]:
    """
    Indices of rows matching ``query``, in canonical order.

    A row matches when its name, IP address, MAC address or type contains the
    query, case-insensitively. An empty query matches every row.
    """
    if not query:
        return list(range(len(rows)))

    needle = query.lower()
    return [
        idx
        for idx, row in enumerate(rows)
        if needle in row.name.lower()
        or needle in row.ip_address.lower()
        or needle in row.mac_address.lower()
        or needle in row.interface_type.lower()
    ]


def sort_indices(
    rows: Sequence[InterfaceRow],
    indices: Sequence[int],
    column: SortColumn,
    ascending: bool = True,
) -> List[int]:
    """Stable sort of ``indices`` by one column's text."""
    # sorted() keeps equal keys in input order even with reverse=True
    return sorted(indices, key=lambda idx: rows[idx].get_field(column), reverse=not ascending)
