import numpy as np
import pytest

from gltf_geometry.cast import cast_values, resolve_dtype
from gltf_geometry.constants import COMPONENT_FORMATS, ComponentType
from gltf_geometry.decoder import TypedValues
from gltf_geometry.errors import NumericCastError


def typed(component_type, values):
    dtype = COMPONENT_FORMATS[component_type].dtype
    return TypedValues(component_type, np.array(values, dtype=dtype))


def test_float_to_float64_is_exact():
    out = cast_values(typed(ComponentType.FLOAT32, [1.0, 2.5, -3.25]), np.float64)
    assert out.dtype == np.float64
    assert out.tolist() == [1.0, 2.5, -3.25]


def test_float_to_int_truncates_toward_zero():
    out = cast_values(typed(ComponentType.FLOAT32, [1.9, -1.9, 0.5, -0.5]), np.int32)
    assert out.tolist() == [1, -1, 0, 0]


@pytest.mark.parametrize("value", [float("nan"), float("inf"), 300.0, -1.0])
def test_float_to_uint8_rejects_unrepresentable(value):
    with pytest.raises(NumericCastError):
        cast_values(typed(ComponentType.FLOAT32, [0.0, value]), np.uint8)


def test_float_to_int_accepts_range_edges():
    out = cast_values(typed(ComponentType.FLOAT32, [255.75, -0.75]), np.uint8)
    assert out.tolist() == [255, 0]


def test_integer_widening_preserves_sign():
    out = cast_values(typed(ComponentType.SIGNED_BYTE, [-128, -1, 127]), np.int64)
    assert out.tolist() == [-128, -1, 127]


def test_integer_narrowing_wraps():
    out = cast_values(typed(ComponentType.UNSIGNED_INT, [255, 256, 70000]), np.uint8)
    assert out.tolist() == [255, 0, 70000 % 256]


def test_signed_to_unsigned_reinterprets():
    out = cast_values(typed(ComponentType.SIGNED_SHORT, [-1, 5]), np.uint32)
    assert out.tolist() == [2**32 - 1, 5]


def test_integer_to_float():
    out = cast_values(typed(ComponentType.UNSIGNED_SHORT, [0, 1, 65535]), np.float32)
    assert out.dtype == np.float32
    assert out.tolist() == [0.0, 1.0, 65535.0]


@pytest.mark.parametrize("dtype", [bool, np.complex64, "U4", object])
def test_rejects_non_numeric_targets(dtype):
    with pytest.raises(TypeError):
        resolve_dtype(dtype)


def test_resolve_dtype_accepts_names_and_python_types():
    assert resolve_dtype("uint16") == np.uint16
    assert resolve_dtype(float) == np.float64
    assert resolve_dtype(int).kind == "i"
