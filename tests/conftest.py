from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from gltf_builders import glb_bytes, triangle


@pytest.fixture
def triangle_scene() -> tuple[dict[str, Any], bytes]:
    return triangle()


@pytest.fixture
def triangle_glb(tmp_path: Path, triangle_scene) -> Path:
    document, bin_data = triangle_scene
    path = tmp_path / "triangle.glb"
    path.write_bytes(glb_bytes(document, bin_data))
    return path


@pytest.fixture
def triangle_gltf(tmp_path: Path, triangle_scene) -> Path:
    document, bin_data = triangle_scene
    document = dict(document, buffers=[{"uri": "triangle.bin", "byteLength": len(bin_data)}])
    (tmp_path / "triangle.bin").write_bytes(bin_data)
    path = tmp_path / "triangle.gltf"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path
