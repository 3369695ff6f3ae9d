import logging

from .core import *
from .errors import *
from .io import Reader, Writer, read_csv, to_csv

__version__ = '0.1.0'

# applications choose where log records go
logging.getLogger(__name__).addHandler(logging.NullHandler())

""" All colframe objects shall conform to the following:
- `__repr__` shall show the class info and types without any data
- `.values` shall expose the underlying data, a read-only np.ndarray for Series and an OrderedDict of Series
for DataFrame
- `__str__` shall pretty print the data with tabulate, shortened to the first and last rows when long
- Series stored in a DataFrame are owned by it and can only be changed through the DataFrame
"""
