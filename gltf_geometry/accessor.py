from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import component_format, components_per_element
from .errors import (
    InvalidAccessorField,
    InvalidAccessorIndex,
    InvalidDocument,
    MissingAccessorField,
    UnknownElementShape,
)


REQUIRED_FIELDS = ("bufferView", "byteOffset", "componentType", "count", "type")


@dataclass(frozen=True)
class Accessor:
    index: int
    buffer_view: int
    byte_offset: int
    byte_stride: int  # 0 means tightly packed
    component_type: int
    element_shape: str
    components_per_element: int
    count: int
    view_offset: int = 0

    @property
    def component_size(self) -> int | None:
        fmt = component_format(self.component_type)
        return None if fmt is None else fmt.size

    @property
    def element_size(self) -> int | None:
        size = self.component_size
        return None if size is None else size * self.components_per_element

    @property
    def start(self) -> int:
        return self.view_offset + self.byte_offset

    def stride(self, honor_stride: bool = True) -> int | None:
        element_size = self.element_size
        if element_size is None:
            return None
        if honor_stride and self.byte_stride:
            return self.byte_stride
        return element_size

    def byte_length(self, honor_stride: bool = True) -> int | None:
        """Bytes spanned from ``start`` to the end of the last element."""
        element_size = self.element_size
        if element_size is None:
            return None
        if self.count == 0:
            return 0
        return (self.count - 1) * self.stride(honor_stride) + element_size


def _int_value(value: Any, field: str, index: int) -> int:
    # bool is an int subclass; JSON true/false is never a valid index or offset
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidAccessorField(field, index, value)
    if isinstance(value, float) and not value.is_integer():
        raise InvalidAccessorField(field, index, value)
    value = int(value)
    if value < 0:
        raise InvalidAccessorField(field, index, value)
    return value


def _int_field(accessor: dict[str, Any], field: str, index: int) -> int:
    return _int_value(accessor[field], field, index)


def _buffer_view(document: dict[str, Any], view_index: int, accessor_index: int) -> dict[str, Any] | None:
    buffer_views = document.get("bufferViews")
    if not buffer_views:
        return None
    if not isinstance(buffer_views, list):
        raise InvalidDocument("Invalid glTF: bufferViews is not a list")
    if not (0 <= view_index < len(buffer_views)) or not isinstance(buffer_views[view_index], dict):
        raise InvalidAccessorField("bufferView", accessor_index, view_index)
    return buffer_views[view_index]


def resolve_accessor(accessor_index: int, document: dict[str, Any]) -> Accessor:
    accessors = document.get("accessors", [])
    if not isinstance(accessors, list):
        raise InvalidDocument("Invalid glTF: accessors is not a list")
    if isinstance(accessor_index, bool) or not isinstance(accessor_index, int):
        raise InvalidAccessorIndex(accessor_index, len(accessors))
    if not (0 <= accessor_index < len(accessors)):
        raise InvalidAccessorIndex(accessor_index, len(accessors))
    accessor = accessors[accessor_index]
    if not isinstance(accessor, dict):
        raise InvalidAccessorIndex(accessor_index, len(accessors))

    for field in REQUIRED_FIELDS:
        if field not in accessor:
            raise MissingAccessorField(field, accessor_index)

    buffer_view = _int_field(accessor, "bufferView", accessor_index)
    byte_offset = _int_field(accessor, "byteOffset", accessor_index)
    component_type = _int_field(accessor, "componentType", accessor_index)
    count = _int_field(accessor, "count", accessor_index)

    shape = accessor["type"]
    per_element = components_per_element(shape) if isinstance(shape, str) else None
    if per_element is None:
        raise UnknownElementShape(shape, accessor_index)

    view = _buffer_view(document, buffer_view, accessor_index)
    view_offset = 0
    byte_stride = 0
    if view is not None:
        view_offset = _int_value(view.get("byteOffset", 0), "bufferView.byteOffset", accessor_index)
        byte_stride = _int_value(view.get("byteStride", 0), "bufferView.byteStride", accessor_index)
    if "byteStride" in accessor:
        byte_stride = _int_field(accessor, "byteStride", accessor_index)

    fmt = component_format(component_type)
    if fmt is not None and byte_stride and byte_stride < fmt.size * per_element:
        raise InvalidAccessorField("byteStride", accessor_index, byte_stride)

    return Accessor(
        index=accessor_index,
        buffer_view=buffer_view,
        byte_offset=byte_offset,
        byte_stride=byte_stride,
        component_type=component_type,
        element_shape=shape,
        components_per_element=per_element,
        count=count,
        view_offset=view_offset,
    )
