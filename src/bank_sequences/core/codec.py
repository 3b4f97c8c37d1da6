"""Bit-index codec for boolean rows.

A compressed row lists the 1-based positions of its true bits, so a row
of size 6 with bits 3, 5 and 6 set is stored as ``[3, 5, 6]``.
"""

import numbers
import numpy as np
from typing import Iterable, List, Sequence, Union


def _row_mask(indices: Iterable, size: int) -> np.ndarray:
    bits = np.zeros(max(size, 0), dtype=bool)
    for index in indices:
        # Out-of-range and non-integral entries are ignored
        if isinstance(index, bool) or not isinstance(index, numbers.Real):
            continue
        if isinstance(index, numbers.Integral) or float(index).is_integer():
            position = int(index)
            if 1 <= position <= size:
                bits[position - 1] = True
    return bits


def decompress_row(indices: Iterable[int], size: int) -> List[bool]:
    """
    Expand 1-based true-bit positions into a boolean row.

    Parameters
    ----------
    indices : Iterable[int]
        1-based positions of true bits; entries outside ``[1, size]`` are ignored
    size : int
        Row length

    Returns
    -------
    List[bool]
        Row of length ``size``

    Examples
    --------
    >>> decompress_row([3, 5, 6], 6)
    [False, False, True, False, True, True]
    """
    return _row_mask(indices, size).tolist()


def decompress_matrix(rows: Sequence[Iterable[int]],
                      row_size: int,
                      as_array: bool = False) -> Union[List[List[bool]], np.ndarray]:
    """
    Apply :func:`decompress_row` to every row independently.

    Parameters
    ----------
    rows : Sequence[Iterable[int]]
        Compressed rows
    row_size : int
        Length of each decompressed row
    as_array : bool
        Return a ``(len(rows), row_size)`` boolean array instead of lists

    Returns
    -------
    List[List[bool]] or np.ndarray
    """
    masks = [_row_mask(row, row_size) for row in rows]
    if as_array:
        if not masks:
            return np.zeros((0, max(row_size, 0)), dtype=bool)
        return np.vstack(masks)
    return [mask.tolist() for mask in masks]


def compress_row(bits: Sequence[bool]) -> List[int]:
    """1-based positions of the true entries of ``bits``."""
    return (np.flatnonzero(np.asarray(bits, dtype=bool)) + 1).tolist()


def compress_matrix(rows: Sequence[Sequence[bool]]) -> List[List[int]]:
    """Compress each boolean row independently."""
    return [compress_row(row) for row in rows]
