from collections import OrderedDict
from collections.abc import Mapping


class Row(Mapping):
    """Read-only view of one DataFrame row, mapping column name to Datum.

    Cells are read from the columns only when accessed; no copy of the row is made.
    A Row is valid for a single predicate evaluation (or a single step of `DataFrame.iter_rows`)
    and raises ReferenceError once it has expired.

    Attributes
    ----------
    position : int
        Position of the row in the DataFrame.

    Examples
    --------
    >>> import colframe as cf
    >>> df = cf.DataFrame({'a': [1, 2], 'b': ['x', 'y']})
    >>> removed = df.filter_by_row(lambda row: row['b'] == 'y')
    >>> df['a'].values
    array([2], dtype=int32)

    """
    def __init__(self, columns, position):
        self._columns = columns
        self.position = position

    def _check_valid(self):
        if self._columns is None:
            raise ReferenceError('Row {} was used outside of the evaluation it was created for'
                                 .format(self.position))

    def _expire(self):
        self._columns = None

    @property
    def expired(self):
        return self._columns is None

    def __getitem__(self, name):
        self._check_valid()

        return self._columns[name].datum(self.position)

    def __iter__(self):
        self._check_valid()

        return iter(list(self._columns))

    def __len__(self):
        self._check_valid()

        return len(self._columns)

    def to_dict(self):
        """Snapshot the row as an OrderedDict of column name to Datum; the snapshot does not expire."""
        self._check_valid()

        return OrderedDict((name, column.datum(self.position)) for name, column in self._columns.items())

    def __repr__(self):
        return '{}(position={}{})'.format(self.__class__.__name__,
                                          self.position,
                                          ', expired' if self.expired else '')
