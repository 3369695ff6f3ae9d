import operator

import numpy as np

from .dtypes import DType, as_dtype, is_compatible
from .generic import BinaryOps

_comparison_operators = {
    '<': operator.lt,
    '<=': operator.le,
    '==': operator.eq,
    '!=': operator.ne,
    '>=': operator.ge,
    '>': operator.gt
}


class Datum(BinaryOps):
    """The value of one cell, tagged with the DType of its column.

    Datum is what a row-oriented view returns for each cell, so predicates can inspect
    rows made of differently-typed columns.

    Equality never fails: a Datum of another kind, or a plain value of an incompatible type,
    is simply not equal. Ordering is only defined against the same kind or compatible plain
    values and raises TypeError otherwise.

    Attributes
    ----------
    kind : DType
    value : numpy scalar or str

    Examples
    --------
    >>> import numpy as np
    >>> from colframe import Datum, DType
    >>> datum = Datum(DType.INT32, np.int32(3))
    >>> datum
    Datum(kind=int32, value=3)
    >>> datum == 3, datum > 2
    (True, True)
    >>> datum == Datum(DType.INT64, np.int64(3))
    False
    >>> datum == 'three'
    False

    """
    __slots__ = ('kind', 'value')

    def __init__(self, kind, value):
        self.kind = as_dtype(kind)
        self.value = value

    @classmethod
    def wrap(cls, value):
        """Tag a single value with the DType it naturally has.

        Python int and float map to the 64-bit kinds, NumPy scalars keep their own.

        """
        if isinstance(value, np.generic):
            return cls(as_dtype(value.dtype), value)
        elif isinstance(value, (bool, int, float, str)):
            return cls(as_dtype(type(value)), value)
        else:
            raise TypeError('Cannot wrap value of type {}'.format(type(value).__name__))

    @property
    def is_numeric(self):
        return self.kind.is_numeric

    def __repr__(self):
        return '{}(kind={}, value={!r})'.format(self.__class__.__name__,
                                                self.kind,
                                                self.value.item() if isinstance(self.value, np.generic)
                                                else self.value)

    def __str__(self):
        return str(self.value)

    def __hash__(self):
        return hash(self.value)

    def __bool__(self):
        return bool(self.value)

    def _comparison(self, other, comparison):
        if isinstance(other, Datum):
            if other.kind is not self.kind:
                return _mismatch(comparison)
            other = other.value
        elif not is_compatible(other, self.kind):
            return _mismatch(comparison)

        return bool(_comparison_operators[comparison](self.value, other))


def _mismatch(comparison):
    if comparison == '==':
        return False
    elif comparison == '!=':
        return True
    else:
        # lets Python raise the usual TypeError for unorderable types
        return NotImplemented
