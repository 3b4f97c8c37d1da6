"""Bank and dimension handling shared by both generators.

A bank maps each allowed value to the maximum number of times it may
appear in one generated sequence. Dimensions are either ``[length]`` or
``[rows, columns]``.
"""

import numbers
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

Bank = Dict[int, int]


def _as_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if float(value).is_integer():
        return int(value)
    raise ValueError(f"{what} must be an integer, got {value!r}")


def validate_bank(bank: Mapping) -> Bank:
    """
    Normalise a bank into a plain ``dict[int, int]``.

    String keys holding integers (as produced by JSON) are accepted.

    Parameters
    ----------
    bank : Mapping
        Value -> maximum occurrence count

    Returns
    -------
    Bank
        Copy of the bank with integer keys and limits

    Raises
    ------
    ValueError
        If a key is not an integer or a limit is negative or fractional
    """
    normalised = {}
    for key, limit in bank.items():
        if isinstance(key, str):
            try:
                key = int(key.strip())
            except ValueError:
                raise ValueError(f"Bank value must be an integer, got {key!r}") from None
        value = _as_int(key, "Bank value")
        count = _as_int(limit, f"Limit for {value}")
        if count < 0:
            raise ValueError(f"Limit for {value} must be non-negative, got {count}")
        normalised[value] = count
    return normalised


@dataclass(frozen=True)
class Dimensions:
    """Requested output shape."""
    rows: int
    columns: int
    is_2d: bool

    @property
    def total(self) -> int:
        return self.rows * self.columns

    @property
    def row_size(self) -> int:
        """Elements per row for ordering; a 1-D request is a single row."""
        return self.columns


def resolve_dimensions(dims: Sequence[int]) -> Dimensions:
    """
    Interpret ``[length]`` or ``[rows, columns]``.

    Raises
    ------
    ValueError
        If ``dims`` does not have one or two entries, or any is negative
    """
    if isinstance(dims, numbers.Integral):
        dims = [dims]
    dims = list(dims)
    if len(dims) not in (1, 2):
        raise ValueError(f"Dimensions must be [length] or [rows, columns], got {dims}")

    sizes = [_as_int(d, "Dimension") for d in dims]
    if any(d < 0 for d in sizes):
        raise ValueError(f"Dimensions must be non-negative, got {sizes}")

    if len(sizes) == 1:
        return Dimensions(rows=1, columns=sizes[0], is_2d=False)
    return Dimensions(rows=sizes[0], columns=sizes[1], is_2d=True)


def bank_capacity(bank: Mapping[int, int]) -> int:
    """Total number of elements the bank can supply."""
    return sum(max(limit, 0) for limit in bank.values())


def available_values(bank: Mapping[int, int],
                     usage: Mapping[int, int],
                     minimum: Optional[int] = None) -> List[int]:
    """
    Sorted bank values still under their limit and strictly above ``minimum``.
    """
    return sorted(
        value for value, limit in bank.items()
        if usage.get(value, 0) < limit and (minimum is None or value > minimum)
    )


def count_usage(sequence: Sequence[int]) -> Counter:
    """Occurrences of each value in ``sequence``."""
    return Counter(sequence)
