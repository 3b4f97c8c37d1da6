"""Tests for bank normalisation and dimension handling."""

import pytest
import numpy as np

from bank_sequences.core.bank import (
    Dimensions,
    validate_bank,
    resolve_dimensions,
    bank_capacity,
    available_values,
    count_usage
)


class TestValidateBank:
    """Test suite for validate_bank."""

    def test_plain_bank_is_copied(self):
        bank = {1: 3, 2: 0}
        normalised = validate_bank(bank)
        assert normalised == {1: 3, 2: 0}
        assert normalised is not bank

    def test_string_keys_from_json(self):
        assert validate_bank({"1": 2, " 7 ": 1}) == {1: 2, 7: 1}

    def test_integral_floats_and_numpy_ints(self):
        assert validate_bank({np.int64(4): 2.0}) == {4: 2}

    def test_negative_limit(self):
        with pytest.raises(ValueError, match="non-negative"):
            validate_bank({1: -1})

    def test_fractional_limit(self):
        with pytest.raises(ValueError, match="integer"):
            validate_bank({1: 1.5})

    def test_non_numeric_key(self):
        with pytest.raises(ValueError, match="integer"):
            validate_bank({"a": 1})

    def test_boolean_limit_rejected(self):
        with pytest.raises(ValueError):
            validate_bank({1: True})

    def test_empty_bank(self):
        assert validate_bank({}) == {}


class TestResolveDimensions:
    """Test suite for resolve_dimensions."""

    def test_one_dimensional(self):
        shape = resolve_dimensions([5])
        assert shape == Dimensions(rows=1, columns=5, is_2d=False)
        assert shape.total == 5
        assert shape.row_size == 5

    def test_two_dimensional(self):
        shape = resolve_dimensions([6, 3])
        assert shape.is_2d
        assert shape.total == 18
        assert shape.row_size == 3

    def test_bare_integer(self):
        assert resolve_dimensions(4).total == 4

    def test_tuple_input(self):
        assert resolve_dimensions((2, 2)).total == 4

    @pytest.mark.parametrize("dims", [[], [1, 2, 3]])
    def test_wrong_arity(self, dims):
        with pytest.raises(ValueError, match="Dimensions must be"):
            resolve_dimensions(dims)

    def test_negative_size(self):
        with pytest.raises(ValueError, match="non-negative"):
            resolve_dimensions([3, -1])

    def test_zero_size(self):
        assert resolve_dimensions([0]).total == 0
        assert resolve_dimensions([3, 0]).total == 0


class TestBankHelpers:
    """Test suite for capacity and availability helpers."""

    def test_capacity(self):
        assert bank_capacity({1: 3, 2: 0, 5: 4}) == 7

    def test_available_values_sorted(self):
        assert available_values({5: 1, 1: 1, 3: 1}, {}) == [1, 3, 5]

    def test_available_values_respects_usage(self):
        assert available_values({1: 2, 2: 1, 3: 0}, {1: 1, 2: 1}) == [1]

    def test_available_values_strictly_above_minimum(self):
        bank = {1: 1, 2: 1, 3: 1, 4: 1}
        assert available_values(bank, {}, minimum=2) == [3, 4]
        assert available_values(bank, {}, minimum=4) == []

    def test_count_usage(self):
        assert count_usage([2, 2, 5]) == {2: 2, 5: 1}
