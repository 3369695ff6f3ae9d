import numpy as np

from .frame import DataFrame
from .series import Series
from .utils import check_type, check_positions, is_position


class _ILocIndexer(object):
    """Implements iloc indexing.

    Attributes
    ----------
    data : Series or DataFrame
        Which data to select from by position.

    """
    def __init__(self, data):
        self.data = check_type(data, (Series, DataFrame))

    def __getitem__(self, item):
        if is_position(item):
            if isinstance(self.data, Series):
                return self.data[item]
            elif isinstance(self.data, DataFrame):
                return self.data._row_snapshot(item)
        elif isinstance(item, slice):
            return self.data[item]
        elif isinstance(item, (list, np.ndarray, Series)):
            if isinstance(item, Series):
                item = item.values

            positions = check_positions(item, len(self.data))

            return self.data._take(positions)
        else:
            raise TypeError('Expected an int, slice, or positions array')
