from __future__ import annotations

"""
Path Ordering Utilities.

Segment-wise, case and accent insensitive comparison of repository paths.
A path that is a strict prefix of another sorts first, so a directory is
always listed before its contents.
"""

import functools
import unicodedata
from typing import Iterable, List, Tuple

from prgraph.domain.constants import PATH_SEPARATOR

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def fold_segment(segment: str) -> str:
    """
    Reduce a path segment to its base letters for comparison.

    Drops combining marks after NFKD decomposition and casefolds, so
    'Édition', 'edition' and 'EDITION' compare equal.
    """
    decomposed = unicodedata.normalize("NFKD", segment)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


@functools.lru_cache(maxsize=4096)
def path_sort_key(path: str, sep: str = PATH_SEPARATOR) -> Tuple[str, ...]:
    """
    Return the sort key of ``path``.

    Tuples compare element by element and a shorter tuple that is a prefix
    of a longer one is smaller, which gives prefix-first ordering for free.
    """
    return tuple(fold_segment(segment) for segment in path.split(sep))


def compare_paths(a: str, b: str, sep: str = PATH_SEPARATOR) -> int:
    """
    Three-way comparison of two paths.

    Returns:
        int: Negative if ``a`` sorts first, positive if ``b`` does, 0 when
        both fold to the same segments.
    """
    key_a = path_sort_key(a, sep)
    key_b = path_sort_key(b, sep)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_paths(paths: Iterable[str], sep: str = PATH_SEPARATOR) -> List[str]:
    """Return ``paths`` ordered by :func:`compare_paths` (stable)."""
    return sorted(paths, key=lambda p: path_sort_key(p, sep))
