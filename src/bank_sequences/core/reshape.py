"""Row-major folding of flat sequences."""

from typing import List, Sequence


def fold_rows(flat: Sequence[int], columns: int) -> List[List[int]]:
    """
    Fold a flat sequence into rows of ``columns`` elements.

    The final row is truncated when ``flat`` does not fill it, which is
    how a generator that stopped early reports a partial matrix. An
    empty sequence folds to an empty matrix.

    Parameters
    ----------
    flat : Sequence[int]
        Values in row-major order
    columns : int
        Row length

    Returns
    -------
    List[List[int]]

    Examples
    --------
    >>> fold_rows([1, 2, 3, 4, 5], 2)
    [[1, 2], [3, 4], [5]]
    """
    if columns <= 0:
        if len(flat):
            raise ValueError(f"Cannot fold {len(flat)} values into rows of {columns}")
        return []
    flat = list(flat)
    return [flat[start:start + columns] for start in range(0, len(flat), columns)]


def flatten_rows(matrix: Sequence[Sequence[int]]) -> List[int]:
    """Concatenate rows back into one row-major list."""
    return [value for row in matrix for value in row]


def row_of(position: int, row_size: int) -> int:
    """Index of the row holding ``position``."""
    return position // row_size if row_size else 0


def position_in_row(position: int, row_size: int) -> int:
    """Offset of ``position`` inside its row."""
    return position % row_size if row_size else position
