"""Post-hoc checks for generated sequences and matrices."""

from typing import Any, Dict, List, Mapping, Sequence, Union

from ..core.bank import validate_bank, resolve_dimensions, count_usage
from ..core.reshape import flatten_rows, fold_rows


def validate_generated_sequence(result: Union[Sequence[int], Sequence[Sequence[int]]],
                                bank: Mapping[int, int],
                                dims: Sequence[int],
                                ordered: bool = False) -> Dict[str, Any]:
    """
    Validate generator output against its bank and requested shape.

    Parameters
    ----------
    result : Sequence[int] or Sequence[Sequence[int]]
        Output of ``generate_random`` or ``generate_ordered``
    bank : Mapping[int, int]
        Bank used for generation
    dims : Sequence[int]
        Requested dimensions
    ordered : bool
        Also require every row to be strictly ascending

    Returns
    -------
    dict
        ``requested`` and ``generated`` element counts, ``complete``,
        ``usage`` per value, the list of ``errors`` and overall ``valid``
        (no errors; a partial result can still be valid)
    """
    bank = validate_bank(bank)
    shape = resolve_dimensions(dims)
    flat: List[int] = flatten_rows(result) if shape.is_2d else list(result)
    usage = count_usage(flat)

    results = {
        'requested': shape.total,
        'generated': len(flat),
        'complete': len(flat) == shape.total,
        'usage': dict(usage),
        'errors': []
    }

    if len(flat) > shape.total:
        results['errors'].append(f"Generated {len(flat)} elements, requested {shape.total}")

    for value, count in sorted(usage.items()):
        if value not in bank:
            results['errors'].append(f"Value {value} is not in the bank")
        elif count > bank[value]:
            results['errors'].append(f"Value {value} used {count} times, limit {bank[value]}")

    if shape.is_2d:
        refolded = fold_rows(flat, shape.columns)
        if [list(row) for row in result] != refolded:
            results['errors'].append("Rows are not a row-major fold of the flat sequence")
        rows = refolded
    else:
        rows = [flat]

    if ordered:
        for index, row in enumerate(rows):
            if any(b <= a for a, b in zip(row, row[1:])):
                results['errors'].append(f"Row {index} is not strictly ascending: {row}")

    results['valid'] = not results['errors']
    return results
