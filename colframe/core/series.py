import operator
from collections import OrderedDict

import numpy as np
from pandas import Series as PandasSeries
from tabulate import tabulate

from .. import config
from ..errors import LengthMismatch, OwnedSeriesError, TypeCoercionError
from .datum import Datum
from .dtypes import DType, as_dtype, infer_dtype, to_array, coerce_scalar, parse_text, format_value, \
    is_compatible, smallest_integer_dtype
from .generic import ArithmeticOps, BinaryOps, BitOps, ColframeCommon, numeric_only
from .utils import check_type, is_scalar, is_position, normalize_position, as_mask, check_positions, \
    check_valid_int_slice, shorten_data

_comparison_operators = {
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
    '!=': operator.ne,
    '>=': operator.ge,
    '>': operator.gt
}

_bitwise_operators = {
    '&': operator.and_,
    '|': operator.or_
}

_arithmetic_operators = {
    '+': operator.add,
    '-': operator.sub,
    '*': operator.mul,
    '/': operator.truediv
}


class Series(BinaryOps, ArithmeticOps, BitOps, ColframeCommon):
    """Ordered column of values, all of the same DType, with an optional name.

    Values live in a NumPy buffer that grows by doubling, so appending is amortized O(1).

    Attributes
    ----------
    name
    kind
    dtype
    iloc

    Examples
    --------
    >>> import colframe as cf
    >>> sr = cf.Series([0, 1, 2])
    >>> sr  # repr
    Series(name=None, dtype=int32)
    >>> print(sr)  # str
    <BLANKLINE>
    ---  --
      0   0
      1   1
      2   2
    >>> len(sr)
    3
    >>> sr[1]
    np.int32(1)
    >>> print(sr.sum(), sr.mean())
    3 1.0
    >>> sr.append(7)
    >>> sr.retain_by_mask(sr > 0)
    >>> sr.values
    array([1, 2, 7], dtype=int32)
    >>> hasattr(cf.Series(['a', 'b']), 'sum')
    False

    """
    _empty_text = 'Empty Series'

    def __init__(self, data=None, dtype=None, name=None):
        """Initialize a Series object.

        Parameters
        ----------
        data : list or tuple or range or numpy.ndarray, optional
            The values; always copied.
        dtype : DType or numpy.dtype or type or str, optional
            Desired type of the elements, see `dtypes.as_dtype`. Numbers are cast to it.
            Inferred from `data` by default, or float64 when there is no data.
        name : str, optional
            Name of the Series.

        """
        data, kind = _process_input(data, dtype)
        self._owned = False
        self._set_buffer(data, kind)
        self.name = name

    @classmethod
    def from_sequence(cls, values, dtype=None, name=None):
        """Create a Series from any iterable of values."""
        if not isinstance(values, (np.ndarray, list, tuple, range)):
            values = list(values)

        return cls(values, dtype, name)

    @classmethod
    def arange(cls, start, stop, dtype=None, name=None):
        """Create a Series of the integers from start up to, excluding, stop.

        By default the values are int32, or int64 if they do not fit.

        Examples
        --------
        >>> Series.arange(0, 5).values
        array([0, 1, 2, 3, 4], dtype=int32)
        >>> Series.arange(0, 2, DType.FLOAT64).values
        array([0., 1.])

        """
        if not is_position(start) or not is_position(stop):
            raise TypeError('Expected integer start and stop')

        if dtype is None:
            kind = smallest_integer_dtype(start, max(start, stop - 1))
        else:
            kind = as_dtype(dtype)
        if not kind.is_numeric:
            raise TypeError('arange requires a numeric dtype, got {}'.format(kind))

        return cls._from_buffer(np.arange(start, stop, dtype=kind.numpy_dtype), kind, name)

    @classmethod
    def _from_buffer(cls, data, kind, name=None):
        # skips validation; data must already be a fresh array of kind's dtype
        series = cls.__new__(cls)
        series._owned = False
        series._set_buffer(data, kind)
        series._name = check_type(name, str)

        return series

    def _set_buffer(self, data, kind):
        self._data = data
        self._length = len(data)
        self.kind = kind
        self.dtype = kind.numpy_dtype

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        self._check_not_owned()
        self._name = check_type(value, str)

    @property
    def values(self):
        """Read-only NumPy view of the elements.

        Returns
        -------
        numpy.ndarray

        """
        view = self._data[:self._length]
        view.flags.writeable = False

        return view

    @property
    def empty(self):
        return self._length == 0

    def __len__(self):
        return self._length

    @property
    def iloc(self):
        """Retrieve Indexer by position.

        Supported iloc functionality exemplified below.

        Returns
        -------
        _ILocIndexer

        Examples
        --------
        >>> sr = Series([1, 2, 3, 4, 5])
        >>> sr.iloc[2]
        np.int32(3)
        >>> sr.iloc[[0, 1, 0, 4]].values
        array([1, 2, 1, 5], dtype=int32)

        """
        from .indexing import _ILocIndexer

        return _ILocIndexer(self)

    def __repr__(self):
        return "{}(name={}, dtype={})".format(self.__class__.__name__,
                                              self.name,
                                              self.kind)

    def __str__(self):
        if self.empty:
            return self._empty_text

        str_data = OrderedDict()
        str_data[' '] = shorten_data(np.arange(self._length))
        name = '' if self.name is None else self.name
        str_data[name] = shorten_data(self.values)

        return tabulate(str_data, headers='keys')

    def __iter__(self):
        return iter(self.values)

    def __getitem__(self, item):
        """Select from the Series.

        Supported selection functionality exemplified below.

        Examples
        --------
        >>> sr = Series(np.arange(5, dtype=np.float32), name='Test')
        >>> sr[-1]
        np.float32(4.0)
        >>> sr = sr[sr > 0]
        >>> sr
        Series(name=Test, dtype=float32)
        >>> print(sr)
               Test
        ---  ------
          0       1
          1       2
          2       3
          3       4
        >>> sr[(sr != 1) & ~(sr > 3)].values
        array([2., 3.], dtype=float32)
        >>> sr[:1].values
        array([1.], dtype=float32)

        """
        if is_position(item):
            return self._data[normalize_position(item, self._length)]
        elif isinstance(item, slice):
            check_valid_int_slice(item)

            return self._select(item)
        elif isinstance(item, (Series, np.ndarray, list)):
            return self._select(as_mask(item, self._length))
        else:
            raise TypeError('Expected an int, a slice, or a bool mask')

    def get(self, position, default=None):
        """Element at position, or default if there is no such position."""
        if not is_position(position):
            raise TypeError('Expected an int position')

        if not -self._length <= position < self._length:
            return default

        return self[position]

    def datum(self, position):
        """Element at position tagged with this Series' DType.

        Returns
        -------
        Datum

        """
        return Datum(self.kind, self[position])

    def _select(self, selector):
        # works for slices, masks and position arrays; np.array forces a copy for slices
        return Series._from_buffer(np.array(self.values[selector]), self.kind, self.name)

    def _take(self, positions):
        return self._select(positions)

    def _check_not_owned(self):
        if self._owned:
            raise OwnedSeriesError(self._name)

    def append(self, value):
        """Append one value, coercing it strictly to the DType.

        Raises
        ------
        TypeError
            If the value is not of a compatible type.
        OverflowError
            If an integer does not fit the DType.

        """
        self._check_not_owned()
        self._append(coerce_scalar(value, self.kind))

    def extend(self, values):
        """Append many values; nothing is appended if any of them is rejected."""
        self._check_not_owned()
        coerced = [coerce_scalar(value, self.kind) for value in values]

        self._reserve(self._length + len(coerced))
        self._data[self._length:self._length + len(coerced)] = coerced
        self._length += len(coerced)

    def _append(self, value):
        if self._length == len(self._data):
            self._reserve(self._length + 1)

        self._data[self._length] = value
        self._length += 1

    def _reserve(self, capacity):
        if capacity <= len(self._data):
            return

        capacity = max(capacity, 2 * len(self._data), config.INITIAL_CAPACITY)
        data = np.empty(capacity, dtype=self.dtype)
        data[:self._length] = self._data[:self._length]
        self._data = data

    def retain_by_mask(self, mask):
        """Keep only the elements where mask is True, in order.

        Parameters
        ----------
        mask : list or numpy.ndarray or Series
            One bool per element.

        Raises
        ------
        LengthMismatch
            If mask does not have one entry per element; the Series is left unchanged.

        """
        self._check_not_owned()
        self._retain(as_mask(mask, self._length))

    def _retain(self, mask):
        self._replace(self.values[mask])

    def _replace(self, data):
        self._data = np.array(data)
        self._length = len(self._data)

    def drop_positions(self, positions):
        """Remove the elements at the given positions.

        Examples
        --------
        >>> sr = Series([0, 1, 2, 3, 4, 5])
        >>> sr.drop_positions([0, 4])
        >>> sr.values
        array([1, 2, 3, 5], dtype=int32)

        """
        self._check_not_owned()
        positions = check_positions(positions, self._length)

        mask = np.ones(self._length, dtype=np.bool_)
        mask[positions] = False
        self._retain(mask)

    def astype(self, dtype):
        """Return a copy converted to another DType.

        Text is parsed like delimited files are; a value which does not parse raises
        TypeCoercionError naming its position. Numbers that do not fit an integer DType
        raise OverflowError.

        """
        kind = as_dtype(dtype)
        if kind is self.kind:
            return self.copy()

        if kind is DType.STRING:
            return Series._from_buffer(to_array([format_value(value) for value in self.values], kind),
                                       kind,
                                       self.name)
        elif self.kind is DType.STRING:
            data = np.empty(self._length, dtype=kind.numpy_dtype)
            for position, text in enumerate(self.values):
                try:
                    data[position] = parse_text(text, kind)
                except ValueError:
                    raise TypeCoercionError(position, self.name, text, kind)

            return Series._from_buffer(data, kind, self.name)
        else:
            return Series._from_buffer(to_array(self.values, kind), kind, self.name)

    def copy(self):
        """Return an independent, unowned copy."""
        return Series._from_buffer(np.array(self.values), self.kind, self.name)

    def _comparison(self, other, comparison):
        if isinstance(other, Datum):
            other = other.value

        if not is_scalar(other):
            raise TypeError('Can currently only compare with scalars')

        result = _comparison_operators[comparison](self.values, other)

        return Series._from_buffer(np.asarray(result, dtype=np.bool_), DType.BOOL, self.name)

    def _bitwise_operation(self, other, operation):
        check_type(other, Series)
        _check_bool(self)
        _check_bool(other)
        if len(other) != len(self):
            raise LengthMismatch(len(self), len(other))

        return Series._from_buffer(_bitwise_operators[operation](self.values, other.values), DType.BOOL, self.name)

    def __invert__(self):
        _check_bool(self)

        return Series._from_buffer(~self.values, DType.BOOL, self.name)

    def _element_wise_operation(self, other, operation):
        """Apply + - * / with a number to every element.

        Integer Series keep their type with an integer operand and become float64 with a
        float operand; division always gives floats.

        Raises
        ------
        TypeError
            If the Series is not numeric or other is not a number.
        OverflowError
            If an int32 result does not fit; int64 wraps around like NumPy does.

        Examples
        --------
        >>> sr = Series([1, 2, 3], name='sr')
        >>> (sr * 2).values
        array([2, 4, 6], dtype=int32)
        >>> (sr + 0.5).values
        array([1.5, 2.5, 3.5])
        >>> (sr / 2).values
        array([0.5, 1. , 1.5])

        """
        kind, data = self._arithmetic(other, operation)

        return Series._from_buffer(data, kind, self.name)

    def _in_place_operation(self, other, operation):
        """Apply += -= *= /= with a number, keeping the Series' type.

        Raises
        ------
        TypeError
            If the result needs another type, e.g. /= on an integer Series.

        Examples
        --------
        >>> sr = Series([1.5, 3.0])
        >>> sr *= 2
        >>> sr.values
        array([3., 6.])

        """
        self._check_not_owned()
        kind, data = self._arithmetic(other, operation)
        if kind is not self.kind:
            raise TypeError('Result of {} {} {!r} is {}, cannot store it in place'.format(self.kind,
                                                                                         operation,
                                                                                         other,
                                                                                         kind))

        self._data[:self._length] = data

        return self

    def _arithmetic(self, other, operation):
        if isinstance(other, Datum):
            other = other.value

        if not self.kind.is_numeric:
            raise TypeError('Arithmetic requires a numeric Series, got dtype {}'.format(self.kind))

        if not is_scalar(other) or not is_compatible(other, DType.FLOAT64):
            raise TypeError('Can currently only operate with numeric scalars')

        if operation == '/' or (self.kind.is_integer and isinstance(other, (float, np.floating))):
            kind = DType.FLOAT32 if self.kind is DType.FLOAT32 else DType.FLOAT64
        else:
            kind = self.kind

        if kind.is_integer:
            # int32 is computed wide so that overflow can be detected
            result = _arithmetic_operators[operation](self.values.astype(np.int64), other)

            return kind, to_array(result, kind)

        result = _arithmetic_operators[operation](self.values.astype(kind.numpy_dtype), other)

        return kind, np.asarray(result, dtype=kind.numpy_dtype)

    @numeric_only
    def sum(self):
        """Sum of the elements, as a NumPy scalar of the Series' own type."""
        return self.values.sum(dtype=self.dtype)

    @numeric_only
    def mean(self):
        """Arithmetic mean as a float; NaN for an empty Series."""
        if self.empty:
            return float('nan')

        return float(self.values.mean(dtype=np.float64))

    @numeric_only
    def min(self):
        return None if self.empty else self.values.min()

    @numeric_only
    def max(self):
        return None if self.empty else self.values.max()

    @classmethod
    def from_pandas(cls, series):
        """Create colframe Series from pandas Series.

        Parameters
        ----------
        series : pandas.Series

        Returns
        -------
        Series

        """
        if isinstance(series.dtype, np.dtype):
            data = series.to_numpy()
            kind = as_dtype(series.dtype)
        else:
            # pandas extension dtypes, e.g. its own str dtype
            data = series.to_numpy(dtype=object)
            kind = infer_dtype(data)

        return cls._from_buffer(to_array(data, kind), kind, series.name)

    def to_pandas(self):
        """Convert to pandas Series

        Returns
        -------
        pandas.Series

        """
        return PandasSeries(np.array(self.values), dtype=self.dtype, name=self.name)


def _process_input(data, dtype):
    if data is None:
        kind = DType.FLOAT64 if dtype is None else as_dtype(dtype)

        return np.empty(0, dtype=kind.numpy_dtype), kind
    else:
        check_type(data, (np.ndarray, list, tuple, range))

        kind = infer_dtype(data) if dtype is None else as_dtype(dtype)

        return to_array(data, kind), kind


def _check_bool(series):
    if series.kind is not DType.BOOL:
        raise TypeError('Expected a bool Series, got dtype {}'.format(series.kind))
