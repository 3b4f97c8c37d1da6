"""Tests for row-major folding."""

import pytest

from bank_sequences.core.reshape import fold_rows, flatten_rows, row_of, position_in_row


class TestFoldRows:
    """Test suite for fold_rows."""

    def test_exact_fill(self):
        assert fold_rows([1, 2, 3, 4, 5, 6], 3) == [[1, 2, 3], [4, 5, 6]]

    def test_short_final_row(self):
        assert fold_rows([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

    def test_empty_sequence(self):
        assert fold_rows([], 3) == []

    def test_zero_columns_empty(self):
        assert fold_rows([], 0) == []

    def test_zero_columns_with_values(self):
        with pytest.raises(ValueError):
            fold_rows([1], 0)

    def test_refold_is_identity(self):
        matrix = [[1, 4, 6], [2, 3, 5], [1, 2]]
        assert fold_rows(flatten_rows(matrix), 3) == matrix


class TestPositionHelpers:
    """Test suite for row/offset helpers."""

    @pytest.mark.parametrize("position,row,offset", [
        (0, 0, 0), (2, 0, 2), (3, 1, 0), (7, 2, 1),
    ])
    def test_row_and_offset(self, position, row, offset):
        assert row_of(position, 3) == row
        assert position_in_row(position, 3) == offset

    def test_without_row_size(self):
        assert row_of(5, None) == 0
        assert position_in_row(5, None) == 5
