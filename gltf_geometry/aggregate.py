from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

import numpy as np
import numpy.typing as npt

from .accessor import Accessor, resolve_accessor
from .cast import cast_values
from .config import DEFAULT_OPTIONS, BindingPolicy, DecodeOptions
from .decoder import TypedValues, decode_accessor
from .errors import InvalidDocument, NumericCastError, UnsupportedComponentType


INDICES = "indices"
POSITION = "POSITION"
PASSTHROUGH_FIELDS = ("material", "mode")


@dataclass(frozen=True)
class PrimitiveBindings:
    mesh: int
    primitive: int
    # semantic name -> accessor index, "indices" included
    attributes: dict[str, int]
    # material/mode, captured but never decoded
    passthrough: dict[str, int]


@dataclass(frozen=True)
class SkippedAccessor:
    name: str
    accessor_index: int
    component_type: int


@dataclass
class Geometry:
    indices: npt.NDArray[np.generic]
    positions: npt.NDArray[np.generic]
    attributes: dict[str, list[TypedValues]] = field(default_factory=dict)
    primitives: list[PrimitiveBindings] = field(default_factory=list)
    skipped: list[SkippedAccessor] = field(default_factory=list)
    document: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def vertices(self) -> npt.NDArray[np.generic]:
        if len(self.positions) % 3:
            raise ValueError(f"{len(self.positions)} position values do not form xyz triples")
        return self.positions.reshape(-1, 3)


def _list_field(owner: dict[str, Any], key: str, where: str) -> list[Any]:
    value = owner.get(key, [])
    if not isinstance(value, list):
        raise InvalidDocument(f"Invalid glTF: {where}{key} is not a list")
    return value


def iter_primitives(document: dict[str, Any]) -> Iterator[PrimitiveBindings]:
    for mesh_index, mesh in enumerate(_list_field(document, "meshes", "")):
        if not isinstance(mesh, dict):
            raise InvalidDocument(f"Invalid glTF: meshes[{mesh_index}] is not an object")
        where = f"meshes[{mesh_index}]."
        for primitive_index, primitive in enumerate(_list_field(mesh, "primitives", where)):
            if not isinstance(primitive, dict):
                raise InvalidDocument(f"Invalid glTF: {where}primitives[{primitive_index}] is not an object")
            attributes = primitive.get("attributes", {})
            if not isinstance(attributes, dict):
                raise InvalidDocument(f"Invalid glTF: {where}primitives[{primitive_index}].attributes is not an object")

            bindings = dict(attributes)
            if INDICES in primitive:
                bindings[INDICES] = primitive[INDICES]
            passthrough = {key: primitive[key] for key in PASSTHROUGH_FIELDS if key in primitive}
            yield PrimitiveBindings(mesh_index, primitive_index, bindings, passthrough)


def collect_bindings(primitives: Iterable[PrimitiveBindings]) -> dict[str, int]:
    bindings: dict[str, int] = {}
    for primitive in primitives:
        bindings.update(primitive.attributes)
    return bindings


def rebase_indices(indices: npt.NDArray[np.generic], base: int) -> npt.NDArray[np.generic]:
    if indices.dtype.kind == "f":
        return indices + indices.dtype.type(base)
    if indices.dtype == np.uint64:
        shifted = indices + np.uint64(base)
        wrapped = shifted < indices
        if wrapped.any():
            raise NumericCastError(int(indices[wrapped][0]) + base, indices.dtype)
        return shifted
    shifted = indices.astype(np.int64) + base
    info = np.iinfo(indices.dtype)
    outside = (shifted < info.min) | (shifted > info.max)
    if outside.any():
        raise NumericCastError(int(shifted[outside][0]), indices.dtype)
    return shifted.astype(indices.dtype)


class _Aggregator:
    def __init__(self, document: dict[str, Any], segment: bytes, options: DecodeOptions) -> None:
        self.document = document
        self.segment = segment
        self.options = options
        self.decoded: dict[int, tuple[Accessor, TypedValues | None]] = {}
        self.index_parts: list[npt.NDArray[np.generic]] = []
        self.position_parts: list[npt.NDArray[np.generic]] = []
        self.attributes: dict[str, list[TypedValues]] = {}
        self.skipped: list[SkippedAccessor] = []
        self.vertex_base = 0

    def decode(self, name: str, accessor_index: int) -> tuple[Accessor, TypedValues | None]:
        if type(accessor_index) is int and accessor_index in self.decoded:
            return self.decoded[accessor_index]

        accessor = resolve_accessor(accessor_index, self.document)
        try:
            typed: TypedValues | None = decode_accessor(
                accessor,
                self.segment,
                honor_stride=self.options.honor_byte_stride,
            )
        except UnsupportedComponentType:
            if self.options.strict_component_types:
                raise
            self.skipped.append(SkippedAccessor(name, accessor.index, accessor.component_type))
            typed = None

        self.decoded[accessor.index] = (accessor, typed)
        return accessor, typed

    def add_group(self, bindings: dict[str, int]) -> None:
        indices = None
        vertex_count = 0
        for name in sorted(bindings):
            accessor, typed = self.decode(name, bindings[name])
            if typed is None:
                continue
            if name == INDICES:
                indices = cast_values(typed, self.options.index_dtype)
            elif name == POSITION:
                self.position_parts.append(cast_values(typed, self.options.position_dtype))
                vertex_count = accessor.count
            else:
                self.attributes.setdefault(name, []).append(typed)

        if indices is not None:
            if self.vertex_base:
                indices = rebase_indices(indices, self.vertex_base)
            self.index_parts.append(indices)
        self.vertex_base += vertex_count

    def result(self, primitives: list[PrimitiveBindings]) -> Geometry:
        return Geometry(
            indices=_join(self.index_parts, self.options.index_dtype),
            positions=_join(self.position_parts, self.options.position_dtype),
            attributes=self.attributes,
            primitives=primitives,
            skipped=self.skipped,
            document=self.document,
        )


def _join(parts: list[npt.NDArray[np.generic]], dtype: np.dtype) -> npt.NDArray[np.generic]:
    if not parts:
        return np.empty(0, dtype=dtype)
    if len(parts) == 1:
        return parts[0]
    return np.concatenate(parts).astype(dtype, copy=False)


def aggregate(
    document: dict[str, Any],
    segment: bytes,
    options: DecodeOptions = DEFAULT_OPTIONS,
) -> Geometry:
    primitives = list(iter_primitives(document))
    if options.binding_policy is BindingPolicy.LAST_WINS:
        groups = [collect_bindings(primitives)]
    else:
        groups = [primitive.attributes for primitive in primitives]

    aggregator = _Aggregator(document, segment, options)
    for bindings in groups:
        aggregator.add_group(bindings)
    return aggregator.result(primitives)
