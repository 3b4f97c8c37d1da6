"""Core building blocks: banks, dimensions, row folding and the bit-index codec."""

from .bank import (
    Bank,
    Dimensions,
    validate_bank,
    resolve_dimensions,
    bank_capacity,
    available_values,
    count_usage
)

from .reshape import (
    fold_rows,
    flatten_rows,
    row_of,
    position_in_row
)

from .codec import (
    decompress_row,
    decompress_matrix,
    compress_row,
    compress_matrix
)

__all__ = [
    # Banks and shapes
    'Bank',
    'Dimensions',
    'validate_bank',
    'resolve_dimensions',
    'bank_capacity',
    'available_values',
    'count_usage',

    # Reshaping
    'fold_rows',
    'flatten_rows',
    'row_of',
    'position_in_row',

    # Codec
    'decompress_row',
    'decompress_matrix',
    'compress_row',
    'compress_matrix'
]
