import numpy as np
import pytest

from colframe import DType
from colframe.core.dtypes import as_dtype, infer_dtype, to_array, coerce_scalar, parse_text, infer_text_dtype, \
    format_value


class TestDType(object):
    @pytest.mark.parametrize('dtype, numpy_dtype', [
        (DType.INT32, np.dtype(np.int32)),
        (DType.INT64, np.dtype(np.int64)),
        (DType.FLOAT32, np.dtype(np.float32)),
        (DType.FLOAT64, np.dtype(np.float64)),
        (DType.BOOL, np.dtype(np.bool_)),
        (DType.STRING, np.dtype(object))
    ])
    def test_numpy_dtype(self, dtype, numpy_dtype):
        assert dtype.numpy_dtype == numpy_dtype

    def test_is_numeric(self):
        assert [dtype for dtype in DType if dtype.is_numeric] == [DType.INT32, DType.INT64,
                                                                  DType.FLOAT32, DType.FLOAT64]

    def test_str(self):
        assert str(DType.STRING) == 'str'

    @pytest.mark.parametrize('value, expected', [
        (DType.BOOL, DType.BOOL),
        ('int32', DType.INT32),
        ('str', DType.STRING),
        ('string', DType.STRING),
        (np.float32, DType.FLOAT32),
        (np.dtype(np.int64), DType.INT64),
        (np.dtype('U3'), DType.STRING),
        (bool, DType.BOOL),
        (int, DType.INT64),
        (float, DType.FLOAT64),
        (str, DType.STRING)
    ])
    def test_as_dtype(self, value, expected):
        assert as_dtype(value) is expected

    @pytest.mark.parametrize('value', [None, np.int8, 'complex128', 'datetime64[ns]'])
    def test_as_dtype_unsupported(self, value):
        with pytest.raises(TypeError):
            as_dtype(value)

    @pytest.mark.parametrize('values, expected', [
        ([1, 2], DType.INT32),
        ([1, 2 ** 31], DType.INT64),
        (range(-3, 3), DType.INT32),
        ([1, 2.5], DType.FLOAT64),
        ([True, False], DType.BOOL),
        (['a'], DType.STRING),
        (np.arange(2, dtype=np.int32), DType.INT32)
    ])
    def test_infer_dtype(self, values, expected):
        assert infer_dtype(values) is expected

    def test_infer_dtype_mixed(self):
        with pytest.raises(TypeError):
            infer_dtype(['a', 1])

    def test_to_array_copies(self):
        data = np.arange(3, dtype=np.int32)

        actual = to_array(data, DType.INT32)
        data[0] = 10

        assert actual[0] == 0

    def test_to_array_multidimensional(self):
        with pytest.raises(ValueError):
            to_array([[1, 2], [3, 4]], DType.INT64)

    @pytest.mark.parametrize('values, dtype', [
        ([2 ** 31, 5], DType.INT32),
        ([-2 ** 31 - 1], DType.INT32),
        (np.array([2 ** 40]), DType.INT32),
        ([1e19], DType.INT64)
    ])
    def test_to_array_overflow(self, values, dtype):
        with pytest.raises(OverflowError):
            to_array(values, dtype)

    def test_to_array_int_bounds(self):
        actual = to_array([-2 ** 31, 2 ** 31 - 1], DType.INT32)

        np.testing.assert_array_equal(actual, np.array([-2 ** 31, 2 ** 31 - 1], dtype=np.int32))


class TestCoercion(object):
    @pytest.mark.parametrize('value, dtype, expected', [
        (1, DType.INT32, np.int32(1)),
        (np.int64(1), DType.INT32, np.int32(1)),
        (1, DType.FLOAT64, np.float64(1)),
        (True, DType.BOOL, np.bool_(True)),
        ('a', DType.STRING, 'a')
    ])
    def test_coerce_scalar(self, value, dtype, expected):
        actual = coerce_scalar(value, dtype)

        assert actual == expected
        assert type(actual) is type(expected)

    @pytest.mark.parametrize('value, dtype', [
        (1.5, DType.INT64),
        (True, DType.INT64),
        (1, DType.BOOL),
        (1, DType.STRING),
        ('1', DType.FLOAT64)
    ])
    def test_coerce_scalar_wrong_type(self, value, dtype):
        with pytest.raises(TypeError):
            coerce_scalar(value, dtype)

    def test_coerce_scalar_overflow(self):
        with pytest.raises(OverflowError):
            coerce_scalar(-2 ** 31 - 1, DType.INT32)


class TestText(object):
    @pytest.mark.parametrize('text, dtype, expected', [
        ('12', DType.INT32, 12),
        ('-12', DType.INT64, -12),
        ('+7', DType.INT32, 7),
        ('1.5', DType.FLOAT64, 1.5),
        ('1e3', DType.FLOAT32, 1000.),
        ('3', DType.FLOAT64, 3.),
        ('TRUE', DType.BOOL, True),
        ('false', DType.BOOL, False),
        ('foo bar', DType.STRING, 'foo bar'),
        ('', DType.STRING, '')
    ])
    def test_parse_text(self, text, dtype, expected):
        assert parse_text(text, dtype) == expected

    @pytest.mark.parametrize('text', ['nan', 'NaN', ' inf', '-Infinity'])
    def test_parse_text_float_words(self, text):
        assert not np.isfinite(parse_text(text, DType.FLOAT64))

    @pytest.mark.parametrize('text, dtype', [
        ('1.5', DType.INT32),
        ('2147483648', DType.INT32),
        ('', DType.INT64),
        ('1_000', DType.INT64),
        ('1_000.5', DType.FLOAT64),
        ('abc', DType.FLOAT64),
        ('1', DType.BOOL),
        ('yes', DType.BOOL)
    ])
    def test_parse_text_invalid(self, text, dtype):
        with pytest.raises(ValueError):
            parse_text(text, dtype)

    @pytest.mark.parametrize('text, expected', [
        ('12', DType.INT32),
        ('-2147483648', DType.INT32),
        ('2147483648', DType.INT64),
        ('99999999999999999999', DType.FLOAT64),
        ('0.5', DType.FLOAT64),
        ('True', DType.BOOL),
        ('foo', DType.STRING),
        ('', DType.STRING),
        ('1.', DType.FLOAT64),
        ('.5e-3', DType.FLOAT64),
        ('NaN', DType.STRING),
        ('inf', DType.STRING),
        ('-Infinity', DType.STRING),
        ('1e', DType.STRING)
    ])
    def test_infer_text_dtype(self, text, expected):
        assert infer_text_dtype(text) is expected

    @pytest.mark.parametrize('value, expected', [
        (np.int32(5), '5'),
        (np.float64(0.1), '0.1'),
        (np.float32(0.1), '0.1'),
        (np.bool_(False), 'False'),
        ('a,b', 'a,b')
    ])
    def test_format_value(self, value, expected):
        assert format_value(value) == expected
