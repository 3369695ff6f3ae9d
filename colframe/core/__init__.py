from .datum import Datum
from .dtypes import DType
from .frame import DataFrame
from .row import Row
from .series import Series

__all__ = ('Datum', 'DType', 'DataFrame', 'Row', 'Series')
