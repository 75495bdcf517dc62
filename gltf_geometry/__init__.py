"""Decode primitive indices and vertex positions from glTF 2.0 (.gltf / .glb) files."""

from .accessor import Accessor, resolve_accessor
from .aggregate import Geometry, PrimitiveBindings, SkippedAccessor, aggregate, iter_primitives
from .cast import cast_values
from .config import BindingPolicy, DecodeOptions
from .constants import COMPONENT_FORMATS, TYPE_COMPONENT_COUNT, ComponentType
from .container import ContainerKind, GlbChunks, GlbHeader, classify_container, read_glb, split_glb
from .decoder import TypedValues, decode_accessor
from .errors import (
    BufferBoundsExceeded,
    ChunkTypeMismatch,
    CompanionNotFound,
    GltfError,
    InputNotFound,
    InvalidAccessorField,
    InvalidAccessorIndex,
    InvalidDocument,
    MagicMismatch,
    MissingAccessorField,
    NoFileSelected,
    NumericCastError,
    SizeMismatch,
    UnknownElementShape,
    UnsupportedComponentType,
    UnsupportedContainer,
    VersionMismatch,
)
from .loader import LoadResult, load_container, load_gltf, try_load_gltf

__version__ = "0.1.0"

__all__ = [
    "Accessor",
    "BindingPolicy",
    "BufferBoundsExceeded",
    "COMPONENT_FORMATS",
    "ChunkTypeMismatch",
    "CompanionNotFound",
    "ComponentType",
    "ContainerKind",
    "DecodeOptions",
    "Geometry",
    "GlbChunks",
    "GlbHeader",
    "GltfError",
    "InputNotFound",
    "InvalidAccessorField",
    "InvalidAccessorIndex",
    "InvalidDocument",
    "LoadResult",
    "MagicMismatch",
    "MissingAccessorField",
    "NoFileSelected",
    "NumericCastError",
    "PrimitiveBindings",
    "SizeMismatch",
    "SkippedAccessor",
    "TYPE_COMPONENT_COUNT",
    "TypedValues",
    "UnknownElementShape",
    "UnsupportedComponentType",
    "UnsupportedContainer",
    "VersionMismatch",
    "aggregate",
    "cast_values",
    "classify_container",
    "decode_accessor",
    "iter_primitives",
    "load_container",
    "load_gltf",
    "read_glb",
    "resolve_accessor",
    "split_glb",
    "try_load_gltf",
]
