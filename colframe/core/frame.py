import logging
from collections import OrderedDict
from collections.abc import Mapping

import numpy as np
from pandas import DataFrame as PandasDataFrame
from tabulate import tabulate

from ..errors import DuplicateColumnName, NameRequired, RowCountMismatch, LengthMismatch
from .datum import Datum
from .dtypes import DType, as_dtype, coerce_scalar
from .generic import ColframeCommon
from .row import Row
from .series import Series
from .utils import check_type, check_inner_types, is_position, normalize_position, as_mask, check_valid_int_slice, \
    shorten_data

logger = logging.getLogger(__name__)


class DataFrame(ColframeCommon):
    """Ordered collection of uniquely-named Series of equal length.

    Columns may be of different DTypes; `get_column` hands a column back only if asked for
    with its actual DType. Rows can be removed with a predicate over a row view, which always
    trims every column to the same rows.

    Attributes
    ----------
    columns
    dtypes
    iloc

    Examples
    --------
    >>> import colframe as cf
    >>> df = cf.DataFrame()
    >>> df.add_column(cf.Series.arange(0, 5, name='col1'))
    >>> df.add_column(cf.Series.arange(10, 15), 'col2')
    >>> df  # repr
    DataFrame(rows=5, columns=[col1: int32, col2: int32])
    >>> df.filter_by_row(lambda row: row['col1'] != 0)
    1
    >>> print(df)
           col1    col2
    ---  ------  ------
      0       1      11
      1       2      12
      2       3      13
      3       4      14
    >>> df.get_column('col2', 'int32').sum()
    np.int32(50)
    >>> df.get_column('col2', 'int64') is None
    True

    """
    _empty_text = 'Empty DataFrame'

    def __init__(self, data=None):
        """Initialize a DataFrame object.

        Parameters
        ----------
        data : dict, optional
            Data as a dict of str -> Series or list or numpy.ndarray, added in order with `add_column`.

        """
        self._data = OrderedDict()
        self._length = 0
        self._filtering = False

        if data is not None:
            check_type(data, dict)

            for name, column in data.items():
                if not isinstance(column, Series):
                    column = Series(column)

                self.add_column(column, name)

    @classmethod
    def _from_columns(cls, columns):
        # adopts the Series as they are; they must be fresh, uniquely named and of equal length
        df = cls()
        for column in columns:
            column._owned = True
            df._data[column.name] = column
            df._length = len(column)

        return df

    @property
    def values(self):
        """Column names mapped to their Series.

        Returns
        -------
        OrderedDict

        """
        return OrderedDict(self._data)

    @property
    def empty(self):
        return len(self._data) == 0 or self._length == 0

    @property
    def columns(self):
        """Names of the columns in order.

        Returns
        -------
        list of str

        """
        return list(self._data.keys())

    @property
    def n_columns(self):
        return len(self._data)

    @property
    def dtypes(self):
        """Column names mapped to their DType.

        Returns
        -------
        OrderedDict

        """
        return OrderedDict((name, column.kind) for name, column in self._data.items())

    def __len__(self):
        """Number of rows, 0 when there are no columns."""
        return self._length

    @property
    def iloc(self):
        """Retrieve Indexer by position.

        An int returns a snapshot of the row as an OrderedDict of Datum,
        a slice or a list of positions returns a new DataFrame.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('a', [5, 6, 7]), ('b', ['x', 'y', 'z']))))
        >>> df.iloc[1]['b']
        Datum(kind=str, value='y')
        >>> print(df.iloc[[0, 2]])
               a  b
        ---  ---  ---
          0    5  x
          1    7  z

        """
        from .indexing import _ILocIndexer

        return _ILocIndexer(self)

    def __repr__(self):
        columns = '[' + ', '.join(['{}: {}'.format(k, v) for k, v in self.dtypes.items()]) + ']'

        return "{}(rows={}, columns={})".format(self.__class__.__name__,
                                                self._length,
                                                columns)

    def __str__(self):
        if self.empty:
            return self._empty_text

        str_data = OrderedDict()
        str_data[' '] = shorten_data(np.arange(self._length))
        str_data.update((name, shorten_data(column.values)) for name, column in self._data.items())

        return tabulate(str_data, headers='keys')

    def _iter(self):
        for column in self._data.values():
            yield column

    def __iter__(self):
        for column_name in self._data:
            yield column_name

    def __contains__(self, item):
        return item in self._data

    def _check_not_filtering(self):
        if self._filtering:
            raise RuntimeError('DataFrame cannot be modified while it is being filtered')

    def add_column(self, series, name=None):
        """Add a Series as the last column.

        The DataFrame stores its own copy of the Series; changes to the passed Series
        afterwards do not affect the DataFrame.

        Parameters
        ----------
        series : Series
        name : str, optional
            Name of the new column; defaults to the name of the Series.

        Raises
        ------
        RowCountMismatch
            If there already are columns and the Series has a different length.
        NameRequired
            If neither the Series nor the call provide a non-empty name.
        DuplicateColumnName
            If a column of the same name exists.

        """
        self._check_not_filtering()
        check_type(series, Series)
        check_type(name, str)

        if name is None:
            name = series.name

        self._check_insertable(series, name)

        column = Series._from_buffer(np.array(series.values), series.kind, name)
        column._owned = True
        self._data[name] = column
        self._length = len(column)

    def _check_insertable(self, series, name, replacing=False):
        others = len(self._data) - (1 if replacing else 0)
        if others > 0 and len(series) != self._length:
            raise RowCountMismatch(self._length, len(series), name)

        if not name:
            raise NameRequired()

        if not replacing and name in self._data:
            raise DuplicateColumnName(name)

    def get_column(self, name, dtype=None):
        """Look up a column, optionally checking its type.

        Parameters
        ----------
        name : str
        dtype : DType or numpy.dtype or type or str, optional
            If given, the column is only returned when it holds exactly this type.

        Returns
        -------
        Series or None
            None if there is no such column or it holds another type. The returned Series
            belongs to the DataFrame and cannot be modified.

        """
        column = self._data.get(name)
        if column is None or dtype is None:
            return column

        if column.kind is not as_dtype(dtype):
            return None

        return column

    def drop_column(self, name):
        """Remove a column, returning it as a regular Series.

        Raises
        ------
        KeyError
            If there is no such column.

        """
        self._check_not_filtering()

        column = self._data.pop(name)
        column._owned = False
        if len(self._data) == 0:
            self._length = 0

        return column

    def __getitem__(self, item):
        """Select from the DataFrame.

        Supported functionality exemplified below.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('a', np.arange(5, 8)), ('b', [1.5, 0., 2.]))))
        >>> df['a']
        Series(name=a, dtype=int64)
        >>> df[['b']]
        DataFrame(rows=3, columns=[b: float64])
        >>> print(df[df['a'] < 7])
               a    b
        ---  ---  ---
          0    5  1.5
          1    6  0
        >>> df[1:]
        DataFrame(rows=2, columns=[a: int64, b: float64])

        """
        if isinstance(item, str):
            return self._data[item]
        elif isinstance(item, list) and all(isinstance(value, str) for value in item) and len(item) > 0:
            for column_name in item:
                if column_name not in self:
                    raise KeyError('Column name not in DataFrame: {}'.format(str(column_name)))

            return DataFrame._from_columns(self._data[column_name].copy() for column_name in item)
        elif isinstance(item, slice):
            check_valid_int_slice(item)

            return self._select(item)
        elif isinstance(item, (Series, np.ndarray, list)):
            return self._select(as_mask(item, self._length))
        else:
            raise TypeError('Expected a column name, list of columns, bool mask, or a slice')

    def __setitem__(self, key, value):
        """Replace a column in place or add a new one.

        Examples
        --------
        >>> df = DataFrame({'a': np.arange(5, 8)})
        >>> df['b'] = np.arange(3)
        >>> df['a'] = ['x', 'y', 'z']
        >>> df
        DataFrame(rows=3, columns=[a: str, b: int64])

        """
        self._check_not_filtering()
        check_type(key, str)
        value = check_type(value, (Series, np.ndarray, list))
        if not isinstance(value, Series):
            value = Series(value)

        if key not in self._data:
            self.add_column(value, key)

            return

        self._check_insertable(value, key, replacing=True)

        column = Series._from_buffer(np.array(value.values), value.kind, key)
        column._owned = True
        self._data[key]._owned = False
        self._data[key] = column
        self._length = len(column)

    def _select(self, selector):
        return DataFrame._from_columns(column._select(selector) for column in self._iter())

    def _take(self, positions):
        return self._select(positions)

    def _row_snapshot(self, position):
        row = Row(self._data, normalize_position(position, self._length))
        try:
            return row.to_dict()
        finally:
            row._expire()

    def head(self, n=5):
        """Return DataFrame with the first n rows."""
        return self[:n]

    def tail(self, n=5):
        """Return DataFrame with the last n rows."""
        return self[max(self._length - n, 0):]

    def copy(self):
        return DataFrame._from_columns(column.copy() for column in self._iter())

    def iter_rows(self):
        """Iterate over the rows as Row views.

        Each Row expires when the next one is requested.

        """
        for position in range(self._length):
            row = Row(self._data, position)
            try:
                yield row
            finally:
                row._expire()

    def filter_by_row(self, predicate):
        """Remove, in place, every row for which predicate is False.

        The predicate is called exactly once per row, in order, with a read-only Row view.
        The result of every call is collected into a mask before any column is touched, so
        if the predicate raises, or returns something other than a bool, the DataFrame is
        left unchanged.

        Parameters
        ----------
        predicate : callable
            Row -> bool (or a bool Datum). It must not modify the DataFrame.

        Returns
        -------
        int
            Number of rows removed.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('col1', [0, 1, 2]), ('col3', ['foo', 'bar', 'foo']))))
        >>> df.filter_by_row(lambda row: row['col3'] != 'foo')
        2
        >>> df['col1'].values
        array([1], dtype=int32)

        """
        if not callable(predicate):
            raise TypeError('Expected a callable predicate')

        self._check_not_filtering()

        mask = self._build_mask(predicate)
        removed = self._retain(mask)
        logger.debug('Filtered DataFrame by row: kept %d rows, removed %d', self._length, removed)

        return removed

    def _build_mask(self, predicate):
        mask = np.empty(self._length, dtype=np.bool_)

        self._filtering = True
        try:
            for position in range(self._length):
                row = Row(self._data, position)
                try:
                    result = predicate(row)
                finally:
                    row._expire()

                mask[position] = _predicate_result(result, position)
        finally:
            self._filtering = False

        return mask

    def filter(self, predicate):
        """Return a new DataFrame with the rows for which predicate is True.

        The predicate is called like in `filter_by_row`, but the DataFrame itself is left unchanged.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('col1', [0, 1, 2]), ('col3', ['foo', 'bar', 'foo']))))
        >>> df.filter(lambda row: row['col1'] > 0)['col3'].values
        array(['bar', 'foo'], dtype=object)
        >>> len(df)
        3

        """
        if not callable(predicate):
            raise TypeError('Expected a callable predicate')

        self._check_not_filtering()

        return self._select(self._build_mask(predicate))

    def push(self, values):
        """Append one row.

        Every value is checked against the DType of its column before anything is appended,
        so a rejected row leaves the DataFrame unchanged.

        Parameters
        ----------
        values : list or tuple or Mapping
            One value (or Datum) per column, in column order, or keyed by column name.

        Raises
        ------
        LengthMismatch
            If there is not exactly one value per column.
        KeyError
            If a mapping lacks one of the columns.
        TypeError, OverflowError
            If a value cannot be stored as the DType of its column.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('a', [1, 2]), ('b', ['x', 'y']))))
        >>> df.push([3, 'z'])
        >>> df.push({'b': 'w', 'a': 4})
        >>> print(df)
               a  b
        ---  ---  ---
          0    1  x
          1    2  y
          2    3  z
          3    4  w

        """
        self._check_not_filtering()
        check_type(values, (list, tuple, Mapping))

        if len(self._data) == 0:
            raise ValueError('Cannot push a row into a DataFrame without columns')

        if len(values) != len(self._data):
            raise LengthMismatch(len(self._data), len(values))

        if isinstance(values, Mapping):
            values = [values[name] for name in self._data]

        coerced = [coerce_scalar(value.value if isinstance(value, Datum) else value, column.kind)
                   for value, column in zip(values, self._iter())]

        for value, column in zip(coerced, self._iter()):
            column._append(value)
        self._length += 1

    def remove(self, position):
        """Remove one row, returning its values.

        Returns
        -------
        OrderedDict
            Column name -> Datum of the removed row.

        Raises
        ------
        IndexOutOfBounds
            If there is no such row.

        Examples
        --------
        >>> df = DataFrame(OrderedDict((('a', [1, 2, 3]), ('b', ['x', 'y', 'z']))))
        >>> df.remove(-1)['b'].value
        'z'
        >>> len(df)
        2

        """
        self._check_not_filtering()
        if not is_position(position):
            raise TypeError('Expected an int position')

        position = normalize_position(position, self._length)
        removed = self._row_snapshot(position)

        mask = np.ones(self._length, dtype=np.bool_)
        mask[position] = False
        self._retain(mask)

        return removed

    def retain_by_mask(self, mask):
        """Keep only the rows where mask is True, in every column.

        Returns
        -------
        int
            Number of rows removed.

        Raises
        ------
        LengthMismatch
            If mask does not have one entry per row; the DataFrame is left unchanged.

        """
        self._check_not_filtering()

        return self._retain(as_mask(mask, self._length))

    def _retain(self, mask):
        if len(mask) != self._length:
            raise LengthMismatch(self._length, len(mask))

        for name, column in self._data.items():
            if len(column) != self._length:
                raise RowCountMismatch(self._length, len(column), name)

        # compute every column first so that a failure cannot leave some columns trimmed
        retained = [(column, column.values[mask]) for column in self._iter()]
        for column, data in retained:
            column._replace(data)

        removed = self._length - int(np.count_nonzero(mask))
        self._length -= removed

        return removed

    def to_csv(self, target, **kwargs):
        """Write the DataFrame as delimited text; see `colframe.io.Writer`."""
        from ..io.csv import Writer

        Writer(target, **kwargs).write(self)

    @classmethod
    def from_pandas(cls, df):
        """Create colframe DataFrame from pandas DataFrame.

        The index is dropped; the columns are added like with `add_column`.

        Parameters
        ----------
        df : pandas.DataFrame

        Returns
        -------
        DataFrame

        Raises
        ------
        NameRequired, DuplicateColumnName
            If a column name is empty or repeated.

        """
        check_inner_types(df.columns, str)

        frame = cls()
        for name, column in df.items():
            frame.add_column(Series.from_pandas(column), name)

        return frame

    def to_pandas(self):
        """Convert to pandas DataFrame.

        Returns
        -------
        pandas.DataFrame

        """
        return PandasDataFrame(OrderedDict((name, column.to_pandas()) for name, column in self._data.items()))


def _predicate_result(result, position):
    if isinstance(result, (bool, np.bool_)):
        return bool(result)
    elif isinstance(result, Datum) and result.kind is DType.BOOL:
        return bool(result.value)
    else:
        raise TypeError('Predicate must return a bool, returned {!r} for row {}'.format(result, position))
