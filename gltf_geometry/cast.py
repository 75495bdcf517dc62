"""Conversion of decoded accessor values into caller-chosen numeric types.

Conversion rules, by (source, target) kind:

    signed int   -> wider int      exact, sign preserved
    unsigned int -> wider int      exact
    any int      -> narrower int   two's-complement wrap (value mod 2**bits)
    signed int   -> unsigned int   two's-complement reinterpretation (-1 -> max)
    any int      -> float          round to nearest representable value
    float32      -> float64        exact
    float32      -> float16        round to nearest, may become +/-inf
    float32      -> any int        truncate toward zero; NaN, inf or a
                                   truncated value outside the target range
                                   raises NumericCastError

Booleans, complex numbers and non-numeric dtypes are rejected as targets.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import numpy.typing as npt

from .decoder import TypedValues
from .errors import NumericCastError


def resolve_dtype(dtype: Any) -> np.dtype:
    target = np.dtype(dtype)
    if target.kind not in "iuf":
        raise TypeError(f"Output type must be an integer or floating dtype, got {target}")
    return target.newbyteorder("=")


def _float_to_int(values: npt.NDArray[np.floating], target: np.dtype) -> npt.NDArray[np.integer]:
    wide = values.astype(np.float64)
    nonfinite = ~np.isfinite(wide)
    if nonfinite.any():
        raise NumericCastError(float(wide[nonfinite][0]), target)

    truncated = np.trunc(wide)
    info = np.iinfo(target)
    # float(info.max) + 1 is the exact power of two just above the range
    outside = (truncated < float(info.min)) | (truncated >= float(info.max) + 1)
    if outside.any():
        raise NumericCastError(float(wide[outside][0]), target)
    return truncated.astype(target)


def cast_values(typed: TypedValues, dtype: Any) -> npt.NDArray[np.generic]:
    target = resolve_dtype(dtype)
    values = typed.values
    if values.dtype.kind == "f" and target.kind in "iu":
        return _float_to_int(values, target)
    return values.astype(target, casting="unsafe")
