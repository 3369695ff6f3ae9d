from collections import OrderedDict

import numpy as np
import pytest

from colframe import Row, Series, DType, Datum


@pytest.fixture
def columns():
    return OrderedDict((('a', Series([1, 2], DType.INT32, 'a')),
                        ('b', Series(['x', 'y'], name='b'))))


class TestRow(object):
    def test_getitem(self, columns):
        row = Row(columns, 1)

        assert row['a'] == Datum(DType.INT32, np.int32(2))
        assert row['b'].kind is DType.STRING
        assert row['b'] == 'y'

    def test_getitem_missing(self, columns):
        row = Row(columns, 0)

        with pytest.raises(KeyError):
            row['c']

        assert row.get('c') is None
        assert 'c' not in row
        assert 'a' in row

    def test_mapping(self, columns):
        row = Row(columns, 0)

        assert list(row) == ['a', 'b']
        assert len(row) == 2
        assert list(row.keys()) == ['a', 'b']

    def test_reads_lazily(self, columns):
        row = Row(columns, 0)
        columns['a']._replace(np.array([10, 20], dtype=np.int32))

        assert row['a'] == Datum(DType.INT32, np.int32(10))

    def test_to_dict(self, columns):
        row = Row(columns, 0)

        actual = row.to_dict()
        row._expire()

        assert actual == OrderedDict((('a', Datum(DType.INT32, np.int32(1))), ('b', Datum(DType.STRING, 'x'))))

    @pytest.mark.parametrize('op', ["row['a']", 'list(row)', 'len(row)', 'row.to_dict()'])
    def test_expired(self, columns, op):
        row = Row(columns, 0)
        row._expire()

        assert row.expired
        with pytest.raises(ReferenceError):
            eval(op)

    def test_repr(self, columns):
        row = Row(columns, 3)
        assert repr(row) == 'Row(position=3)'

        row._expire()
        assert repr(row) == 'Row(position=3, expired)'
