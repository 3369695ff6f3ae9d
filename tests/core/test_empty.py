import numpy as np
import pytest

from colframe import Series, DataFrame, DType
from .test_frame import assert_dataframe_equal
from .test_series import assert_series_equal


class TestEmptyDataFrame(object):
    @pytest.mark.parametrize('op,expected', [
        ('df[2:]', 'df'),
        ('df.head()', 'df'),
        ('df.tail()', 'df'),
        ('df.copy()', 'df'),
        ('df.iloc[[]]', 'df')
    ])
    def test_empty_ops(self, df_empty, op, expected):
        df = df_empty
        assert_dataframe_equal(eval(op), eval(expected))

    @pytest.mark.parametrize('op,exception', [
        ('df["a"]', KeyError),
        ('df[["a", "b"]]', KeyError),
        ('df.drop_column("a")', KeyError),
        ('df.iloc[0]', IndexError)
    ])
    def test_empty_exceptions(self, df_empty, op, exception):
        df = df_empty

        with pytest.raises(exception):
            eval(op)

    def test_get_column_empty(self, df_empty):
        assert df_empty.get_column('a', DType.INT32) is None

    def test_columns_without_rows(self):
        df = DataFrame({'a': Series([], DType.INT32)})

        assert len(df) == 0
        assert df.empty
        assert df.columns == ['a']
        assert df.filter_by_row(lambda row: True) == 0


class TestEmptySeries(object):
    @pytest.mark.parametrize('op', ['sr[0]', 'sr[-1]', 'sr.iloc[0]'])
    def test_empty_index(self, op):
        sr = Series([], DType.INT64)

        with pytest.raises(IndexError):
            eval(op)

    def test_empty_ops(self):
        sr = Series([], DType.INT64)

        assert_series_equal(sr[sr > 0], sr)
        assert_series_equal(sr[:3], sr)
        assert sr.get(0) is None
        assert list(sr) == []


def test_empty_series_init():
    assert_series_equal(Series(), Series(np.empty(0), DType.FLOAT64))


def test_empty_dataframe_init():
    assert_dataframe_equal(DataFrame(), DataFrame({}))
