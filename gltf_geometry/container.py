from __future__ import annotations

import base64
import binascii
import json
import struct
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath
from typing import Any
from urllib.parse import unquote

from .constants import (
    CHUNK_TYPE_JSON,
    GLB_CHUNK_HEADER_LENGTH,
    GLB_MAGIC,
    GLB_PREAMBLE_LENGTH,
    GLB_VERSION_SUPPORTED,
)
from .errors import (
    BufferBoundsExceeded,
    ChunkTypeMismatch,
    InvalidDocument,
    MagicMismatch,
    SizeMismatch,
    UnsupportedContainer,
    VersionMismatch,
)


class ContainerKind(Enum):
    GLTF = ".gltf"
    GLB = ".glb"


@dataclass(frozen=True)
class GlbHeader:
    magic: bytes
    version: int
    total_length: int
    json_chunk_length: int
    json_chunk_type: int


@dataclass(frozen=True)
class GlbChunks:
    header: GlbHeader
    json_chunk: bytes
    # everything after the JSON chunk, trailing chunk header included
    bin_region: bytes

    @property
    def bin_chunk_type(self) -> int | None:
        if len(self.bin_region) < GLB_CHUNK_HEADER_LENGTH:
            return None
        return struct.unpack_from("<I", self.bin_region, 4)[0]

    @property
    def bin_chunk(self) -> bytes:
        if not self.bin_region:
            return b""
        if len(self.bin_region) < GLB_CHUNK_HEADER_LENGTH:
            raise BufferBoundsExceeded(0, GLB_CHUNK_HEADER_LENGTH, len(self.bin_region))
        # chunk type is consumed, not checked
        (chunk_length,) = struct.unpack_from("<I", self.bin_region, 0)
        end = GLB_CHUNK_HEADER_LENGTH + chunk_length
        if end > len(self.bin_region):
            raise BufferBoundsExceeded(GLB_CHUNK_HEADER_LENGTH, chunk_length, len(self.bin_region))
        return self.bin_region[GLB_CHUNK_HEADER_LENGTH:end]


def classify_container(filename: str | PurePath) -> ContainerKind:
    suffix = PurePath(filename).suffix.lower()
    for kind in ContainerKind:
        if kind.value == suffix:
            return kind
    raise UnsupportedContainer(suffix or str(filename))


def split_glb(data: bytes) -> GlbChunks:
    magic = bytes(data[: len(GLB_MAGIC)])
    if len(magic) == len(GLB_MAGIC) and magic != GLB_MAGIC:
        raise MagicMismatch(GLB_MAGIC, magic)
    if len(data) < GLB_PREAMBLE_LENGTH:
        raise BufferBoundsExceeded(0, GLB_PREAMBLE_LENGTH, len(data))

    magic, version, total_length, json_length, json_type = struct.unpack_from("<4sIIII", data, 0)
    if version != GLB_VERSION_SUPPORTED:
        raise VersionMismatch(GLB_VERSION_SUPPORTED, version)
    if total_length != len(data):
        raise SizeMismatch(len(data), total_length)
    if json_type != CHUNK_TYPE_JSON:
        raise ChunkTypeMismatch(CHUNK_TYPE_JSON, json_type)

    json_end = GLB_PREAMBLE_LENGTH + json_length
    if json_end > total_length:
        raise BufferBoundsExceeded(GLB_PREAMBLE_LENGTH, json_length, total_length)

    header = GlbHeader(magic, version, total_length, json_length, json_type)
    return GlbChunks(header, data[GLB_PREAMBLE_LENGTH:json_end], data[json_end:])


def parse_document(text: bytes | str) -> dict[str, Any]:
    try:
        if isinstance(text, bytes):
            text = text.decode("utf-8")
        document = json.loads(text)
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidDocument(f"Invalid glTF JSON: {exc}") from exc

    if not isinstance(document, dict):
        raise InvalidDocument("Invalid glTF: JSON root is not an object")
    return document


def read_glb(data: bytes) -> tuple[dict[str, Any], bytes]:
    chunks = split_glb(data)
    return parse_document(chunks.json_chunk), chunks.bin_chunk


def decode_data_uri(uri: str) -> bytes:
    header, sep, payload = uri.partition(",")
    if not sep or not header.endswith(";base64"):
        raise InvalidDocument(f"Unsupported data URI: {header or uri}")
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise InvalidDocument(f"Invalid base64 buffer: {exc}") from exc


def buffer_source(document: dict[str, Any], base_dir: Path) -> Path | bytes | None:
    buffers = document.get("buffers")
    if not buffers:
        return None
    if not isinstance(buffers, list) or not isinstance(buffers[0], dict):
        raise InvalidDocument("Invalid glTF: buffers must be a list of objects")

    uri = buffers[0].get("uri")
    if not isinstance(uri, str) or not uri:
        raise InvalidDocument("Invalid glTF: buffers[0].uri missing")
    if uri.startswith("data:"):
        return decode_data_uri(uri)
    return base_dir / unquote(uri)
