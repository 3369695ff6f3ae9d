from .csv import Reader, Writer, read_csv, to_csv

__all__ = ('Reader', 'Writer', 'read_csv', 'to_csv')
