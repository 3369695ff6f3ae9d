import re
from enum import Enum

import numpy as np


class DType(Enum):
    """The scalar types a Series may hold.

    Each member is bound to the NumPy dtype used for storage. Text is kept as Python str
    objects in an object array, so values of any length can be appended.

    Examples
    --------
    >>> from colframe import DType
    >>> DType.INT32.numpy_dtype
    dtype('int32')
    >>> DType.STRING.is_numeric
    False

    """
    INT32 = 'int32'
    INT64 = 'int64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    BOOL = 'bool'
    STRING = 'str'

    def __str__(self):
        return self.value

    @property
    def numpy_dtype(self):
        return _dtype_to_numpy_mapping[self]

    @property
    def is_numeric(self):
        return self in _numeric_dtypes

    @property
    def is_integer(self):
        return self in (DType.INT32, DType.INT64)


_dtype_to_numpy_mapping = {
    DType.INT32: np.dtype(np.int32),
    DType.INT64: np.dtype(np.int64),
    DType.FLOAT32: np.dtype(np.float32),
    DType.FLOAT64: np.dtype(np.float64),
    DType.BOOL: np.dtype(np.bool_),
    DType.STRING: np.dtype(object)
}

_numpy_to_dtype_mapping = {
    'int32': DType.INT32,
    'int64': DType.INT64,
    'float32': DType.FLOAT32,
    'float64': DType.FLOAT64,
    'bool': DType.BOOL,
    'object': DType.STRING
}

_numeric_dtypes = frozenset((DType.INT32, DType.INT64, DType.FLOAT32, DType.FLOAT64))

_python_to_dtype_mapping = {
    bool: DType.BOOL,
    int: DType.INT64,
    float: DType.FLOAT64,
    str: DType.STRING
}

_name_to_dtype_mapping = {
    'str': DType.STRING,
    'string': DType.STRING,
    'int': DType.INT64,
    'float': DType.FLOAT64
}


def as_dtype(value):
    """Resolve anything that names a supported type to its DType.

    Parameters
    ----------
    value : DType or numpy.dtype or type or str
        E.g. DType.INT32, np.dtype('int32'), np.int32, 'int32', or one of the Python types
        bool, int, float, str (int and float map to the 64-bit types).

    Returns
    -------
    DType

    Examples
    --------
    >>> import numpy as np
    >>> as_dtype(np.float32)
    <DType.FLOAT32: 'float32'>
    >>> as_dtype(str)
    <DType.STRING: 'str'>

    """
    if isinstance(value, DType):
        return value

    # np.dtype(None) would silently mean float64
    if value is None:
        raise TypeError('Expected a supported dtype, received None')

    if isinstance(value, type) and value in _python_to_dtype_mapping:
        return _python_to_dtype_mapping[value]

    if isinstance(value, str):
        if value in _name_to_dtype_mapping:
            return _name_to_dtype_mapping[value]
        for dtype in DType:
            if dtype.value == value:
                return dtype

    try:
        np_dtype = np.dtype(value)
    except TypeError:
        raise TypeError('Expected a supported dtype, received: {}'.format(str(value)))

    if np_dtype.kind == 'U':
        return DType.STRING

    if np_dtype.name not in _numpy_to_dtype_mapping:
        raise TypeError('dtype {} is not supported'.format(np_dtype))

    return _numpy_to_dtype_mapping[np_dtype.name]


def infer_dtype(values):
    """Infer the DType of a sequence of Python or NumPy values, the way NumPy would.

    Text must not be mixed with other types. Arrays keep their own dtype, while plain
    integers become int32 unless some value needs int64, the same as when reading text.

    Examples
    --------
    >>> infer_dtype([1, 2])
    <DType.INT32: 'int32'>
    >>> infer_dtype([1, 2 ** 40])
    <DType.INT64: 'int64'>
    >>> infer_dtype(np.arange(2))
    <DType.INT64: 'int64'>

    """
    if isinstance(values, np.ndarray):
        if values.dtype.kind == 'O':
            _check_all_str(values)
        return as_dtype(values.dtype)

    values = list(values)
    if any(isinstance(value, str) for value in values):
        _check_all_str(values)

        return DType.STRING

    inferred = np.asarray(values)
    if inferred.dtype.kind not in 'biuf':
        raise TypeError('Cannot infer a supported dtype from values of type {}'.format(inferred.dtype))

    if inferred.dtype.kind in 'iu':
        return smallest_integer_dtype(inferred.min(), inferred.max())

    return as_dtype(inferred.dtype)


def smallest_integer_dtype(low, high):
    """INT32 if both bounds fit into it, INT64 otherwise."""
    limits = np.iinfo(np.int32)
    if limits.min <= int(low) and int(high) <= limits.max:
        return DType.INT32

    return DType.INT64


def to_array(values, dtype):
    """Copy values into a new NumPy array of the given DType.

    Numbers are cast like `numpy.ndarray.astype` does; text is never converted to or from numbers.

    Raises
    ------
    OverflowError
        If a value does not fit into an integer DType.

    """
    dtype = as_dtype(dtype)

    if dtype is DType.STRING:
        values = list(values)
        _check_all_str(values)
        array = np.empty(len(values), dtype=object)
        array[:] = [str(value) for value in values]

        return array

    array = np.array(values)
    if array.size == 0:
        return array.astype(dtype.numpy_dtype).reshape(0)

    if array.ndim != 1:
        raise ValueError('Expected 1-dimensional data, got {} dimensions'.format(array.ndim))

    if array.dtype.kind not in 'biuf':
        raise TypeError('Cannot store values of type {} as {}'.format(array.dtype, dtype))

    if dtype.is_integer:
        _check_integer_range(array, dtype)

    return array.astype(dtype.numpy_dtype, copy=False)


def _check_integer_range(array, dtype):
    if array.dtype.kind == 'f' and not np.isfinite(array).all():
        raise ValueError('Cannot store non-finite values as {}'.format(dtype))

    limits = np.iinfo(dtype.numpy_dtype)
    low, high = array.min(), array.max()
    if low < limits.min or high > limits.max:
        raise OverflowError('{} does not fit into {}'.format(low if low < limits.min else high, dtype))


def _check_all_str(values):
    for value in values:
        if not isinstance(value, str):
            raise TypeError('Expected only str values, found {}'.format(type(value).__name__))


def _is_python_or_numpy_bool(value):
    return isinstance(value, (bool, np.bool_))


def _is_number(value):
    return isinstance(value, (int, float, np.integer, np.floating)) and not _is_python_or_numpy_bool(value)


def is_compatible(value, dtype):
    """Whether a plain scalar may be compared with or stored as the DType."""
    if dtype is DType.STRING:
        return isinstance(value, str)
    elif dtype is DType.BOOL:
        return _is_python_or_numpy_bool(value)
    else:
        return _is_number(value)


def coerce_scalar(value, dtype):
    """Convert a single value to the NumPy scalar of the DType, without lossy conversions.

    Raises
    ------
    TypeError
        If the value is of an incompatible type, e.g. a float for an integer Series.
    OverflowError
        If an integer does not fit the integer DType.

    """
    if dtype is DType.STRING:
        if not isinstance(value, str):
            raise TypeError('Expected a str, received {}'.format(type(value).__name__))
        return str(value)

    if not is_compatible(value, dtype):
        raise TypeError('Cannot store {!r} as {}'.format(value, dtype))

    if dtype.is_integer:
        if isinstance(value, (float, np.floating)):
            raise TypeError('Cannot store float {!r} as {}'.format(value, dtype))

        limits = np.iinfo(dtype.numpy_dtype)
        if not limits.min <= int(value) <= limits.max:
            raise OverflowError('{} does not fit into {}'.format(value, dtype))

    return dtype.numpy_dtype.type(value)


# text conversion used when reading delimited files
_INT_PATTERN = re.compile(r'^\s*[+-]?\d+\s*$')
_FLOAT_PATTERN = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$')
_BOOL_LITERALS = {'true': True, 'false': False}


def parse_text(text, dtype):
    """Parse a raw text field into the NumPy scalar of the DType.

    Raises
    ------
    ValueError
        If the text is not a valid literal of the DType or does not fit it.

    """
    if dtype is DType.STRING:
        return text
    elif dtype is DType.BOOL:
        try:
            return np.bool_(_BOOL_LITERALS[text.strip().lower()])
        except KeyError:
            raise ValueError('Invalid bool literal: {!r}'.format(text))
    elif dtype.is_integer:
        if not _INT_PATTERN.match(text):
            raise ValueError('Invalid integer literal: {!r}'.format(text))

        value = int(text)
        limits = np.iinfo(dtype.numpy_dtype)
        if not limits.min <= value <= limits.max:
            raise ValueError('{} does not fit into {}'.format(value, dtype))

        return dtype.numpy_dtype.type(value)
    else:
        if '_' in text:
            raise ValueError('Invalid float literal: {!r}'.format(text))

        return dtype.numpy_dtype.type(float(text))


def infer_text_dtype(text):
    """Infer the DType of a column from one raw text field.

    Only plain decimal literals infer float64; words such as nan or inf are parsed
    by float columns but infer str.

    Examples
    --------
    >>> infer_text_dtype('12')
    <DType.INT32: 'int32'>
    >>> infer_text_dtype('12345678901')
    <DType.INT64: 'int64'>
    >>> infer_text_dtype('1.5')
    <DType.FLOAT64: 'float64'>
    >>> infer_text_dtype('False')
    <DType.BOOL: 'bool'>
    >>> infer_text_dtype('NaN')
    <DType.STRING: 'str'>

    """
    for dtype in (DType.BOOL, DType.INT32, DType.INT64):
        try:
            parse_text(text, dtype)
        except ValueError:
            continue

        return dtype

    if _FLOAT_PATTERN.match(text):
        return DType.FLOAT64

    return DType.STRING


def format_value(value):
    """Text form of a stored value; the inverse of `parse_text`."""
    if isinstance(value, str):
        return value

    # NumPy scalars print the shortest repr that round-trips at their own precision
    return str(value)
