from __future__ import annotations

from typing import NamedTuple

import numpy as np
import numpy.typing as npt

from .accessor import Accessor
from .constants import ComponentType, component_format
from .errors import BufferBoundsExceeded, UnsupportedComponentType


class TypedValues(NamedTuple):
    """Decoded components of one accessor, tagged by their source type.

    ``values`` is flat: ``count * components_per_element`` numbers in
    element order, stored in the dtype that matches ``component_type``.
    """

    component_type: ComponentType
    values: npt.NDArray[np.generic]

    @property
    def size(self) -> int:
        return int(self.values.size)

    def tolist(self) -> list[int | float]:
        return self.values.tolist()


def decode_accessor(
    accessor: Accessor,
    segment: bytes,
    *,
    honor_stride: bool = True,
) -> TypedValues:
    fmt = component_format(accessor.component_type)
    if fmt is None:
        raise UnsupportedComponentType(accessor.component_type, accessor.index)

    per_element = accessor.components_per_element
    element_size = fmt.size * per_element
    stride = accessor.stride(honor_stride)

    start = accessor.start
    count = accessor.count
    needed = accessor.byte_length(honor_stride)
    if start + needed > len(segment):
        raise BufferBoundsExceeded(start, needed, len(segment))

    native = fmt.dtype.newbyteorder("=")
    if count == 0:
        values = np.empty(0, dtype=native)
    elif stride == element_size:
        raw = np.frombuffer(segment, dtype=fmt.dtype, count=count * per_element, offset=start)
        values = raw.astype(native)
    else:
        raw = np.ndarray(
            shape=(count, per_element),
            dtype=fmt.dtype,
            buffer=segment,
            offset=start,
            strides=(stride, fmt.size),
        )
        values = raw.astype(native).reshape(-1)

    return TypedValues(ComponentType(accessor.component_type), values)
