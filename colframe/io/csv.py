import csv
import gzip
import io
import itertools
import logging
import os
from collections import OrderedDict
from contextlib import contextmanager

from .. import config
from ..core import DataFrame, Series
from ..core.dtypes import DType, as_dtype, infer_text_dtype, parse_text, format_value
from ..core.utils import check_type, check_inner_types, replace_if_none
from ..errors import DuplicateColumnName, EmptySource, MalformedRow, NameRequired, TypeCoercionError

logger = logging.getLogger(__name__)

_type_resolutions = ('schema', 'strict', 'infer')


class Reader(object):
    """Read delimited text into a DataFrame.

    The source may be gzip-compressed; this is detected from its first bytes, not its name,
    and the data is decompressed as it is parsed. Records are converted and appended to
    the columns one at a time, so neither the raw nor the decompressed text is held in memory.

    Column types come from `schema` and/or are inferred from the first data row, depending on
    `type_resolution`:

    - 'schema': schema entries are used, the other columns are inferred.
    - 'strict': the schema must name every column, nothing is inferred.
    - 'infer': the schema is ignored, every column is inferred.

    Inference picks the first of bool (true/false in any case), int32, int64 and float64
    that parses the field, and str otherwise. Only decimal literals infer float64, so a
    first field such as NaN or inf gives a str column. All following rows must parse as
    that type; float columns also accept nan and inf.

    Examples
    --------
    >>> import io
    >>> reader = Reader(io.StringIO('col1,col2\\n1,foo\\n2,bar\\n'))
    >>> df = reader.read()
    >>> df
    DataFrame(rows=2, columns=[col1: int32, col2: str])

    """
    def __init__(self, source, delimiter=None, quote=None, has_headers=True, header=None, schema=None,
                 type_resolution=None, encoding=None):
        """Initialize a Reader.

        Parameters
        ----------
        source : str or os.PathLike or file-like
            Path, binary stream (peekable or seekable), or text stream.
        delimiter : str, optional
            Field separator; `config.DEFAULT_DELIMITER` by default.
        quote : str, optional
            Quote character; `config.DEFAULT_QUOTE` by default.
        has_headers : bool, optional
            Whether the first record holds the column names.
        header : list of str, optional
            Column names; required if has_headers is False, otherwise replaces the names
            found in the source and must have as many entries.
        schema : dict, optional
            Column name -> DType (or anything `dtypes.as_dtype` accepts).
        type_resolution : {'schema', 'strict', 'infer'}, optional
            How schema and inference combine; `config.DEFAULT_TYPE_RESOLUTION` by default.
        encoding : str, optional
            `config.DEFAULT_ENCODING` by default.

        """
        self.source = source
        self.delimiter = replace_if_none(delimiter, config.DEFAULT_DELIMITER)
        self.quote = replace_if_none(quote, config.DEFAULT_QUOTE)
        self.has_headers = check_type(has_headers, bool)
        self.header = check_inner_types(check_type(header, list), str)
        self.type_resolution = replace_if_none(type_resolution, config.DEFAULT_TYPE_RESOLUTION)
        self.encoding = replace_if_none(encoding, config.DEFAULT_ENCODING)

        if self.type_resolution not in _type_resolutions:
            raise ValueError('type_resolution must be one of {}, got {!r}'.format(_type_resolutions,
                                                                                  self.type_resolution))

        if not self.has_headers and self.header is None:
            raise ValueError('A header must be supplied when the source has no header row')

        if schema is None:
            self.schema = None
        else:
            check_type(schema, dict)
            self.schema = OrderedDict((name, as_dtype(dtype)) for name, dtype in schema.items())

    def __repr__(self):
        return '{}(source={!r}, delimiter={!r}, type_resolution={!r})'.format(self.__class__.__name__,
                                                                           self.source,
                                                                           self.delimiter,
                                                                           self.type_resolution)

    def read(self):
        """Parse the whole source.

        Returns
        -------
        DataFrame

        Raises
        ------
        EmptySource
            If the source has no header record.
        DuplicateColumnName, NameRequired
            If the column names are repeated or empty.
        MalformedRow
            If a record does not have one field per column.
        TypeCoercionError
            If a field does not parse as the type of its column.

        """
        with self._open() as stream:
            records = _numbered(csv.reader(stream, delimiter=self.delimiter, quotechar=self.quote))

            names, records = self._read_names(records)
            columns = None
            row = 0
            for line, fields in records:
                if len(fields) != len(names):
                    raise MalformedRow(row, line, len(names), len(fields))

                if columns is None:
                    columns = self._create_columns(names, fields)

                _append_fields(columns, fields, row)
                row += 1

        if columns is None:
            columns = self._create_columns(names, None)

        logger.debug('Read %d rows of %d columns from %r', row, len(names), self.source)

        return DataFrame._from_columns(columns)

    @contextmanager
    def _open(self):
        if isinstance(self.source, io.TextIOBase):
            yield self.source
        elif isinstance(self.source, (str, bytes, os.PathLike)):
            with open(self.source, 'rb') as raw:
                with _decoded(raw, self.encoding) as stream:
                    yield stream
        else:
            with _decoded(self.source, self.encoding) as stream:
                yield stream

    def _read_names(self, records):
        first = next(records, None)
        if first is None and self.has_headers:
            raise EmptySource(self.source)

        if self.has_headers:
            names = first[1]
            if self.header is not None:
                if len(self.header) != len(names):
                    raise ValueError('Header override has {} names but the header record has {} fields'
                                     .format(len(self.header), len(names)))
                names = self.header
        else:
            names = self.header
            if first is not None:
                # without a header row the first record is data
                records = itertools.chain([first], records)

        _check_names(names)

        if self.schema is not None and self.type_resolution != 'infer':
            unknown = [name for name in self.schema if name not in names]
            if len(unknown) > 0:
                raise ValueError('Schema names columns not in the header: {}'.format(unknown))

        return list(names), records

    def _resolve_dtypes(self, names, first_fields):
        if self.type_resolution == 'infer' or self.schema is None:
            schema = {}
        else:
            schema = self.schema

        if self.type_resolution == 'strict':
            missing = [name for name in names if name not in schema]
            if len(missing) > 0:
                raise ValueError('Schema does not give a type for columns: {}'.format(missing))

        dtypes = []
        for position, name in enumerate(names):
            if name in schema:
                dtypes.append(schema[name])
            elif first_fields is None:
                dtypes.append(DType.STRING)
            else:
                dtypes.append(infer_text_dtype(first_fields[position]))

        return dtypes

    def _create_columns(self, names, first_fields):
        dtypes = self._resolve_dtypes(names, first_fields)
        logger.debug('Resolved column types: %s', ', '.join('{}: {}'.format(name, dtype)
                                                            for name, dtype in zip(names, dtypes)))

        return [Series(dtype=dtype, name=name) for name, dtype in zip(names, dtypes)]


class Writer(object):
    """Write a DataFrame as delimited text.

    Values are written in their shortest round-trip text form, bools as True/False.
    Fields are quoted only when they contain the delimiter, the quote character or a line break.

    Examples
    --------
    >>> import io
    >>> import colframe as cf
    >>> buffer = io.StringIO()
    >>> Writer(buffer).write(cf.DataFrame({'a': [1, 2], 'b': ['x', 'y,z']}))
    >>> print(buffer.getvalue())
    a,b
    1,x
    2,"y,z"
    <BLANKLINE>

    """
    def __init__(self, target, delimiter=None, quote=None, has_headers=True, compress=None, encoding=None):
        """Initialize a Writer.

        Parameters
        ----------
        target : str or os.PathLike or file-like
            Path, binary stream, or text stream.
        delimiter : str, optional
            `config.DEFAULT_DELIMITER` by default.
        quote : str, optional
            `config.DEFAULT_QUOTE` by default.
        has_headers : bool, optional
            Whether to write the column names as the first record.
        compress : bool, optional
            Gzip the output; by default only if target is a path ending in .gz.
            Has no effect on text streams.
        encoding : str, optional
            `config.DEFAULT_ENCODING` by default.

        """
        self.target = target
        self.delimiter = replace_if_none(delimiter, config.DEFAULT_DELIMITER)
        self.quote = replace_if_none(quote, config.DEFAULT_QUOTE)
        self.has_headers = check_type(has_headers, bool)
        self.encoding = replace_if_none(encoding, config.DEFAULT_ENCODING)

        if compress is None:
            compress = isinstance(target, (str, os.PathLike)) and os.fspath(target).lower().endswith('.gz')
        self.compress = check_type(compress, bool)

    def __repr__(self):
        return '{}(target={!r}, delimiter={!r}, compress={})'.format(self.__class__.__name__,
                                                                  self.target,
                                                                  self.delimiter,
                                                                  self.compress)

    def write(self, df):
        """Write all rows of the DataFrame.

        Parameters
        ----------
        df : DataFrame

        """
        check_type(df, DataFrame)

        with self._open() as stream:
            records = csv.writer(stream, delimiter=self.delimiter, quotechar=self.quote, lineterminator='\n')

            if self.has_headers:
                records.writerow(df.columns)

            columns = [column.values for column in df.values.values()]
            for position in range(len(df)):
                records.writerow([format_value(column[position]) for column in columns])

        logger.debug('Wrote %d rows of %d columns to %r', len(df), df.n_columns, self.target)

    @contextmanager
    def _open(self):
        if isinstance(self.target, io.TextIOBase):
            yield self.target
        elif isinstance(self.target, (str, bytes, os.PathLike)):
            with open(self.target, 'wb') as raw:
                with self._encoded(raw) as stream:
                    yield stream
        else:
            with self._encoded(self.target) as stream:
                yield stream

    @contextmanager
    def _encoded(self, raw):
        compressed = gzip.GzipFile(fileobj=raw, mode='wb') if self.compress else None
        stream = io.TextIOWrapper(raw if compressed is None else compressed, encoding=self.encoding, newline='')
        try:
            yield stream
            stream.flush()
        finally:
            # leave the caller's stream open
            stream.detach()
            if compressed is not None:
                compressed.close()


def read_csv(source, **kwargs):
    """Read delimited text into a DataFrame.

    Parameters
    ----------
    source : str or os.PathLike or file-like
    kwargs
        Passed on to `Reader`.

    Returns
    -------
    DataFrame

    See Also
    --------
    Reader

    """
    return Reader(source, **kwargs).read()


def to_csv(df, target, **kwargs):
    """Write the DataFrame as delimited text.

    Parameters
    ----------
    df : DataFrame
    target : str or os.PathLike or file-like
    kwargs
        Passed on to `Writer`.

    See Also
    --------
    Writer

    """
    Writer(target, **kwargs).write(df)


def _numbered(records):
    # csv yields an empty record for a blank line
    for fields in records:
        if fields:
            yield records.line_num, fields


def _check_names(names):
    seen = set()
    for name in names:
        if len(name) == 0:
            raise NameRequired('Header contains an empty column name')
        if name in seen:
            raise DuplicateColumnName(name)
        seen.add(name)


def _append_fields(columns, fields, row):
    for column, field in zip(columns, fields):
        try:
            value = parse_text(field, column.kind)
        except ValueError:
            raise TypeCoercionError(row, column.name, field, column.kind)

        column._append(value)


def _is_gzip(raw):
    if hasattr(raw, 'peek'):
        return raw.peek(len(config.GZIP_MAGIC))[:len(config.GZIP_MAGIC)] == config.GZIP_MAGIC

    start = raw.tell()
    magic = raw.read(len(config.GZIP_MAGIC))
    raw.seek(start)

    return magic == config.GZIP_MAGIC


@contextmanager
def _decoded(raw, encoding):
    compressed = None
    if _is_gzip(raw):
        logger.debug('Detected gzip framing, decompressing while reading')
        compressed = gzip.GzipFile(fileobj=raw, mode='rb')

    stream = io.TextIOWrapper(raw if compressed is None else compressed, encoding=encoding, newline='')
    try:
        yield stream
    finally:
        stream.detach()
        if compressed is not None:
            compressed.close()
