import numpy as np
import pytest

from colframe import Series, IndexOutOfBounds, LengthMismatch
from colframe import config
from colframe.core.utils import check_type, is_position, normalize_position, check_positions, as_mask, \
    shorten_data


class TestChecks(object):
    def test_check_type(self):
        assert check_type(None, int) is None
        assert check_type(3, (int, float)) == 3

        with pytest.raises(TypeError):
            check_type('abc', int)

    @pytest.mark.parametrize('data, expected', [
        (1, True),
        (np.int32(1), True),
        (True, False),
        (np.bool_(True), False),
        (1.0, False),
        ('1', False)
    ])
    def test_is_position(self, data, expected):
        assert is_position(data) == expected

    @pytest.mark.parametrize('position, expected', [(0, 0), (4, 4), (-1, 4), (-5, 0)])
    def test_normalize_position(self, position, expected):
        assert normalize_position(position, 5) == expected

    @pytest.mark.parametrize('position', [5, -6])
    def test_normalize_position_out_of_bounds(self, position):
        with pytest.raises(IndexOutOfBounds):
            normalize_position(position, 5)

    def test_check_positions(self):
        actual = check_positions([0, -1, 2], 5)

        np.testing.assert_array_equal(actual, np.array([0, 4, 2]))
        assert actual.dtype == np.dtype(np.int64)

    def test_check_positions_wrong_type(self):
        with pytest.raises(TypeError):
            check_positions([0.5, 1], 5)


class TestMask(object):
    def test_as_mask_list(self):
        np.testing.assert_array_equal(as_mask([True, False], 2), np.array([True, False]))

    def test_as_mask_series(self):
        np.testing.assert_array_equal(as_mask(Series([False, True]), 2), np.array([False, True]))

    def test_as_mask_empty(self):
        assert as_mask([], 0).dtype == np.dtype(np.bool_)

    def test_as_mask_wrong_length(self):
        with pytest.raises(LengthMismatch):
            as_mask([True], 2)

    @pytest.mark.parametrize('mask', [[1, 0], Series([1, 0]), [[True], [False]]])
    def test_as_mask_wrong_type(self, mask):
        with pytest.raises(TypeError):
            as_mask(mask, 2)


def test_shorten_data():
    data = np.arange(config.DISPLAY_MAX_ROWS + 1)

    actual = shorten_data(data)

    assert len(actual) == 2 * config.DISPLAY_EDGE_ROWS + 1
    assert actual[config.DISPLAY_EDGE_ROWS] == '...'
    assert actual[-1] == config.DISPLAY_MAX_ROWS


def test_shorten_data_short():
    assert shorten_data(np.arange(3)) == [0, 1, 2]
