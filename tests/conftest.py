from collections import OrderedDict

import numpy as np
import pytest

from colframe import Series, DataFrame, DType


# module-scoped fixtures are shared, so tests must not mutate them; mutating tests use the function-scoped ones
@pytest.fixture(scope='module')
def data_f32():
    return np.arange(1, 6, dtype=np.float32)


@pytest.fixture(scope='module')
def data_i64():
    return np.arange(1, 6, dtype=np.int64)


@pytest.fixture(scope='module')
def data_str():
    return ['a', 'Abc', 'goosfraba', '   dC  ', 'secrETariat']


@pytest.fixture(scope='module')
def series_f32(data_f32):
    return Series(data_f32, DType.FLOAT32)


@pytest.fixture(scope='module')
def series_i64(data_i64):
    return Series(data_i64, DType.INT64)


@pytest.fixture(scope='module')
def series_str(data_str):
    return Series(data_str, DType.STRING)


@pytest.fixture(scope='module')
def series_bool():
    return Series([True, True, False, False, False], DType.BOOL)


@pytest.fixture
def series_mutable():
    return Series.arange(0, 5, name='mutable')


@pytest.fixture(scope='module')
def df_small(data_f32, series_i64, series_str):
    return DataFrame(OrderedDict((('a', data_f32), ('b', series_i64), ('c', series_str))))


@pytest.fixture(scope='module')
def df_empty():
    return DataFrame()


@pytest.fixture
def df_numbers():
    df = DataFrame()
    df.add_column(Series.arange(0, 5, name='col1'))
    df.add_column(Series.arange(10, 15), 'col2')

    return df


@pytest.fixture
def df_mixed():
    return DataFrame(OrderedDict((('col1', Series.arange(0, 5, DType.INT32)),
                                  ('col2', Series([0.5, 1.5, 2.5, 3.5, 4.5])),
                                  ('col3', ['foo', 'bar', 'foo', 'bar', 'foo']))))
