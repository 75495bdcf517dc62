from __future__ import annotations

from typing import Any


class GltfError(RuntimeError):
    pass


class NoFileSelected(GltfError):
    def __init__(self) -> None:
        super().__init__("No file selected")


class UnsupportedContainer(GltfError):
    def __init__(self, extension: str) -> None:
        self.extension = extension
        super().__init__(f"Unable to read file of type {extension!r} (expected .gltf or .glb)")


class HeaderMismatch(GltfError):
    field = "header"

    def __init__(self, expected: Any, actual: Any) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid GLB {self.field}: expected {expected!r}, got {actual!r}")


class MagicMismatch(HeaderMismatch):
    field = "magic"


class VersionMismatch(HeaderMismatch):
    field = "version"


class SizeMismatch(HeaderMismatch):
    field = "length"


class ChunkTypeMismatch(HeaderMismatch):
    field = "JSON chunk type"


class InvalidDocument(GltfError):
    pass


class InputNotFound(GltfError):
    role = "Input"

    def __init__(self, path: Any) -> None:
        self.path = path
        super().__init__(f"{self.role} not found: {path}")


class CompanionNotFound(InputNotFound):
    role = "Companion buffer"


class InvalidAccessorIndex(GltfError):
    def __init__(self, accessor_index: Any, accessor_count: int) -> None:
        self.accessor_index = accessor_index
        self.accessor_count = accessor_count
        super().__init__(f"Accessor index out of range: {accessor_index!r} (document has {accessor_count})")


class MissingAccessorField(GltfError):
    def __init__(self, field: str, accessor_index: int) -> None:
        self.field = field
        self.accessor_index = accessor_index
        super().__init__(f"Accessor {accessor_index} is missing required field {field!r}")


class InvalidAccessorField(GltfError):
    def __init__(self, field: str, accessor_index: int, value: Any) -> None:
        self.field = field
        self.accessor_index = accessor_index
        self.value = value
        super().__init__(f"Accessor {accessor_index} has invalid {field!r}: {value!r}")


class UnknownElementShape(GltfError):
    def __init__(self, shape: Any, accessor_index: int) -> None:
        self.shape = shape
        self.accessor_index = accessor_index
        super().__init__(f"Accessor {accessor_index} has unknown type {shape!r}")


class BufferBoundsExceeded(GltfError):
    def __init__(self, offset: int, length: int, segment_length: int) -> None:
        self.offset = offset
        self.length = length
        self.segment_length = segment_length
        super().__init__(
            f"Read of {length} bytes at offset {offset} exceeds buffer of {segment_length} bytes"
        )


class UnsupportedComponentType(GltfError):
    def __init__(self, component_type: Any, accessor_index: int) -> None:
        self.component_type = component_type
        self.accessor_index = accessor_index
        super().__init__(f"Accessor {accessor_index} has unsupported componentType {component_type!r}")


class NumericCastError(GltfError):
    def __init__(self, value: Any, dtype: Any) -> None:
        self.value = value
        self.dtype = dtype
        super().__init__(f"Cannot cast {value!r} to {dtype}")
