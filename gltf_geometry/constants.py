from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

import numpy as np


GLB_MAGIC = b"glTF"
GLB_VERSION_SUPPORTED = 2

GLB_HEADER_LENGTH = 12
GLB_CHUNK_HEADER_LENGTH = 8
# header + JSON chunk header
GLB_PREAMBLE_LENGTH = GLB_HEADER_LENGTH + GLB_CHUNK_HEADER_LENGTH

CHUNK_TYPE_JSON = 0x4E4F534A  # b"JSON"
CHUNK_TYPE_BIN = 0x004E4942  # b"BIN\0"


class ComponentType(IntEnum):
    SIGNED_BYTE = 5120
    UNSIGNED_BYTE = 5121
    SIGNED_SHORT = 5122
    UNSIGNED_SHORT = 5123
    UNSIGNED_INT = 5125
    FLOAT32 = 5126


@dataclass(frozen=True)
class ComponentFormat:
    size: int
    signed: bool
    dtype: np.dtype


def _format(size: int, signed: bool, dtype: str) -> ComponentFormat:
    return ComponentFormat(size, signed, np.dtype(dtype))


COMPONENT_FORMATS: Mapping[int, ComponentFormat] = MappingProxyType(
    {
        ComponentType.SIGNED_BYTE: _format(1, True, "<i1"),
        ComponentType.UNSIGNED_BYTE: _format(1, False, "<u1"),
        ComponentType.SIGNED_SHORT: _format(2, True, "<i2"),
        ComponentType.UNSIGNED_SHORT: _format(2, False, "<u2"),
        ComponentType.UNSIGNED_INT: _format(4, False, "<u4"),
        ComponentType.FLOAT32: _format(4, True, "<f4"),
    }
)

TYPE_COMPONENT_COUNT: Mapping[str, int] = MappingProxyType(
    {
        "SCALAR": 1,
        "VEC2": 2,
        "VEC3": 3,
        "VEC4": 4,
        "MAT2": 4,
        "MAT3": 9,
        "MAT4": 16,
    }
)


def component_format(code: int) -> ComponentFormat | None:
    return COMPONENT_FORMATS.get(code)


def components_per_element(shape: str) -> int | None:
    return TYPE_COMPONENT_COUNT.get(shape)


def component_type_name(code: int) -> str:
    try:
        return ComponentType(code).name
    except ValueError:
        return f"UNKNOWN({code})"
