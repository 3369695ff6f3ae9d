from collections import OrderedDict

import numpy as np
import pandas as pd
import pytest

from colframe import Series, DataFrame, DType, DuplicateColumnName, NameRequired
from .test_frame import assert_dataframe_equal
from .test_series import assert_series_equal


class TestPandasConversions(object):
    def test_from_pandas_series(self, data_i64, series_i64):
        pandas_series = pd.Series(data_i64)

        actual = Series.from_pandas(pandas_series)
        expected = series_i64

        assert_series_equal(actual, expected)

    def test_from_pandas_series_str(self, data_str):
        pandas_series = pd.Series(data_str, name='c')

        actual = Series.from_pandas(pandas_series)
        expected = Series(data_str, DType.STRING, 'c')

        assert_series_equal(actual, expected)

    def test_from_pandas_series_unsupported(self):
        with pytest.raises(TypeError):
            Series.from_pandas(pd.Series([1, 'a', 2.5], dtype=object))

    def test_from_pandas_df(self, data_f32, df_small):
        pandas_df = pd.DataFrame(OrderedDict((('a', data_f32),
                                              ('b', np.arange(1, 6)),
                                              ('c', ['a', 'Abc', 'goosfraba', '   dC  ', 'secrETariat']))))

        actual = DataFrame.from_pandas(pandas_df)
        expected = df_small

        assert_dataframe_equal(actual, expected)

    def test_from_pandas_df_owns_columns(self):
        actual = DataFrame.from_pandas(pd.DataFrame({'a': [1, 2, 3]}))
        actual.filter_by_row(lambda row: row['a'] > 1)

        np.testing.assert_array_equal(actual['a'].values, np.array([2, 3]))

    def test_from_pandas_df_empty_name(self):
        with pytest.raises(NameRequired):
            DataFrame.from_pandas(pd.DataFrame({'': [1, 2]}))

    def test_from_pandas_df_duplicate_names(self):
        with pytest.raises(DuplicateColumnName):
            DataFrame.from_pandas(pd.DataFrame([[1, 2]], columns=['a', 'a']))

    def test_from_pandas_df_non_str_names(self):
        with pytest.raises(TypeError):
            DataFrame.from_pandas(pd.DataFrame({0: [1, 2]}))

    def test_from_pandas_df_drops_index(self):
        actual = DataFrame.from_pandas(pd.DataFrame({'a': [1.5, 2.5]}, index=['x', 'y']))

        assert actual.columns == ['a']
        assert len(actual) == 2

    def test_to_pandas_series(self, data_f32, series_f32):
        actual = series_f32.to_pandas()
        expected = pd.Series(data_f32)

        assert actual.equals(expected)

    def test_to_pandas_df(self, data_f32):
        df = DataFrame(OrderedDict((('a', np.arange(5)), ('b', data_f32))))

        actual = df.to_pandas()
        expected = pd.DataFrame(OrderedDict((('a', np.arange(5)), ('b', data_f32))))

        assert actual.equals(expected)
