"""Exceptions raised by colframe.

All of them derive from `ColframeError` and from the builtin exception closest in meaning,
so callers may catch either, e.g. `IndexOutOfBounds` is also an `IndexError`.
"""


class ColframeError(Exception):
    """Base class of all colframe errors."""


class IndexOutOfBounds(ColframeError, IndexError):
    def __init__(self, index, length):
        self.index = index
        self.length = length

        super(IndexOutOfBounds, self).__init__('Index {} out of bounds for length {}'.format(index, length))


class LengthMismatch(ColframeError, ValueError):
    def __init__(self, expected, actual, message=None):
        self.expected = expected
        self.actual = actual

        if message is None:
            message = 'Expected length {}, got {}'.format(expected, actual)

        super(LengthMismatch, self).__init__(message)


class RowCountMismatch(LengthMismatch):
    def __init__(self, expected, actual, name=None):
        self.name = name

        message = 'Column {!r} has {} rows but the DataFrame has {}'.format(name, actual, expected)
        super(RowCountMismatch, self).__init__(expected, actual, message)


class DuplicateColumnName(ColframeError, ValueError):
    def __init__(self, name):
        self.name = name

        super(DuplicateColumnName, self).__init__('Column name {!r} already exists'.format(name))


class NameRequired(ColframeError, ValueError):
    def __init__(self, message='Column requires a non-empty name'):
        super(NameRequired, self).__init__(message)


class TypeCoercionError(ColframeError, ValueError):
    """A text value could not be converted to the type of its column.

    Attributes
    ----------
    row : int
        Zero-based data row.
    column : str
    value : str
        The offending raw value.
    dtype : DType
        The type the value was expected to convert to.

    """
    def __init__(self, row, column, value, dtype):
        self.row = row
        self.column = column
        self.value = value
        self.dtype = dtype

        super(TypeCoercionError, self).__init__('Cannot convert {!r} at row {}, column {!r} to {}'
                                                .format(value, row, column, dtype))


class MalformedRow(ColframeError, ValueError):
    """A record does not have as many fields as the header.

    Attributes
    ----------
    row : int
        Zero-based data row.
    line : int
        Line in the source where the record ends.
    expected : int
    found : int

    """
    def __init__(self, row, line, expected, found):
        self.row = row
        self.line = line
        self.expected = expected
        self.found = found

        super(MalformedRow, self).__init__('Row {} (line {}) has {} fields, expected {}'
                                           .format(row, line, found, expected))


class EmptySource(ColframeError, ValueError):
    def __init__(self, source):
        self.source = source

        super(EmptySource, self).__init__('No header found in {}'.format(source))


class OwnedSeriesError(ColframeError, RuntimeError):
    def __init__(self, name):
        self.name = name

        super(OwnedSeriesError, self).__init__('Series {!r} belongs to a DataFrame and cannot be modified directly'
                                               .format(name))
