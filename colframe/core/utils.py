import numpy as np

from .. import config
from ..errors import IndexOutOfBounds, LengthMismatch


def check_type(data, expected_types):
    if data is not None and not isinstance(data, expected_types):
        raise TypeError('Expected: {}'.format(str(expected_types)))

    return data


def check_inner_types(data, expected_types):
    if data is not None:
        for value in data:
            check_type(value, expected_types)

    return data


def is_scalar(data):
    return isinstance(data, (int, float, str, bool, np.generic))


def is_position(data):
    # bool is an int but never a valid position
    return isinstance(data, (int, np.integer)) and not isinstance(data, (bool, np.bool_))


def normalize_position(position, length):
    if not -length <= position < length:
        raise IndexOutOfBounds(position, length)

    return position + length if position < 0 else position


def check_positions(positions, length):
    """Validate a sequence of positions, returning them as an int64 array with no negatives."""
    positions = np.asarray(positions)
    if positions.size == 0:
        return positions.astype(np.int64).reshape(0)

    if positions.ndim != 1 or positions.dtype.kind not in 'iu':
        raise TypeError('Expected a 1-dimensional sequence of integer positions')

    out_of_bounds = (positions < -length) | (positions >= length)
    if out_of_bounds.any():
        raise IndexOutOfBounds(int(positions[out_of_bounds][0]), length)

    return np.where(positions < 0, positions + length, positions).astype(np.int64)


def as_mask(mask, length):
    """Validate mask as a boolean array of exactly `length` entries.

    Parameters
    ----------
    mask : list or numpy.ndarray or Series
        Series must be of DType.BOOL.
    length : int

    Returns
    -------
    numpy.ndarray

    """
    from .dtypes import DType
    from .series import Series

    if isinstance(mask, Series):
        if mask.kind is not DType.BOOL:
            raise TypeError('Expected a bool Series as mask, got dtype {}'.format(mask.kind))
        mask = mask.values
    else:
        mask = np.asarray(mask)
        if mask.size == 0:
            mask = mask.astype(np.bool_).reshape(0)
        elif mask.dtype.kind != 'b' or mask.ndim != 1:
            raise TypeError('Expected a 1-dimensional sequence of bool as mask')

    if len(mask) != length:
        raise LengthMismatch(length, len(mask), 'Mask has length {}, expected {}'.format(len(mask), length))

    return mask


def check_valid_int_slice(slice_):
    if not all(value is None or is_position(value) for value in (slice_.start, slice_.stop, slice_.step)):
        raise ValueError('Can currently only slice with integers')


def shorten_data(data):
    if len(data) > config.DISPLAY_MAX_ROWS:
        edge = config.DISPLAY_EDGE_ROWS

        return list(data[:edge]) + ['...'] + list(data[-edge:])
    else:
        return list(data)


def replace_if_none(value, default):
    return default if value is None else value
