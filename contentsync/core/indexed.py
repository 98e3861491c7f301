"""Index-keyed maps.

The document store cannot hold a list nested inside another list, so each
nested sequence travels as ``{"0": v0, "1": v1, ...}``. Decoding orders the
values by the integer value of their keys, never lexicographically, so
``"10"`` lands after ``"2"``.
"""

from typing import Any, Dict, List, Mapping, Sequence, Tuple, TypeVar


T = TypeVar("T")


def to_indexed_map(values: Sequence[T]) -> Dict[str, T]:
    return {str(index): value for index, value in enumerate(values)}


def _index_sort_key(key: Any) -> Tuple[int, int, str]:
    # Numeric keys first in numeric order, anything else after them.
    try:
        return (0, int(key), "")
    except (TypeError, ValueError):
        return (1, 0, str(key))


def from_indexed_map(mapping: Mapping[str, T] | Sequence[T]) -> List[T]:
    """Rebuild the ordered list stored in ``mapping``.

    A plain list is accepted too and returned as a copy, so documents written
    with native arrays still load.
    """
    if isinstance(mapping, list):
        return list(mapping)
    if not isinstance(mapping, Mapping):
        raise TypeError(f"Expected an index-keyed map, got {type(mapping).__name__}")
    return [mapping[key] for key in sorted(mapping, key=_index_sort_key)]
