from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from .aggregate import Geometry, aggregate
from .config import DEFAULT_OPTIONS, DecodeOptions
from .container import ContainerKind, buffer_source, classify_container, parse_document, split_glb
from .errors import CompanionNotFound, GltfError, InputNotFound, NoFileSelected
from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def read_binary_file(path: Path) -> bytes:
    logger.debug(f"Opening file {path}")
    data = path.read_bytes()
    logger.debug(f"File is {len(data)} bytes")
    return data


def load_container(path: PathLike) -> tuple[dict[str, Any], bytes]:
    path = Path(path)
    kind = classify_container(path)
    if not path.is_file():
        raise InputNotFound(path)
    logger.info(f"Loading {kind.value} file: {path}")

    if kind is ContainerKind.GLTF:
        document = parse_document(read_binary_file(path))
        source = buffer_source(document, path.parent)
        if source is None:
            logger.warning(f"{path} declares no buffers")
            return document, b""
        if isinstance(source, bytes):
            logger.debug(f"Embedded buffer is {len(source)} bytes")
            return document, source
        logger.info(f"Companion .bin file: {source}")
        if not source.is_file():
            raise CompanionNotFound(source)
        return document, read_binary_file(source)

    chunks = split_glb(read_binary_file(path))
    logger.debug(f"JSON is {chunks.header.json_chunk_length} bytes")
    return parse_document(chunks.json_chunk), chunks.bin_chunk


def load_gltf(path: PathLike | None, options: DecodeOptions = DEFAULT_OPTIONS) -> Geometry:
    if path is None or not os.fspath(path):
        raise NoFileSelected()

    document, segment = load_container(path)
    geometry = aggregate(document, segment, options)

    for skipped in geometry.skipped:
        logger.warning(
            f"Skipped {skipped.name}: accessor {skipped.accessor_index} "
            f"has unsupported componentType {skipped.component_type}"
        )
    logger.info(f"Decoded {len(geometry.indices)} indices, {geometry.vertex_count} vertices")
    return geometry


@dataclass(frozen=True)
class LoadResult:
    geometry: Geometry | None = None
    error: GltfError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Geometry:
        if self.error is not None:
            raise self.error
        if self.geometry is None:
            raise ValueError("LoadResult holds neither geometry nor an error")
        return self.geometry


def try_load_gltf(path: PathLike | None, options: DecodeOptions = DEFAULT_OPTIONS) -> LoadResult:
    try:
        return LoadResult(geometry=load_gltf(path, options))
    except GltfError as exc:
        return LoadResult(error=exc)
