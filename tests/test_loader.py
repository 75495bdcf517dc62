import base64
import json
import logging

import pytest

from gltf_builders import TRIANGLE_INDICES, TRIANGLE_POSITIONS, glb_bytes
from gltf_geometry.config import DecodeOptions
from gltf_geometry.errors import (
    CompanionNotFound,
    InputNotFound,
    InvalidDocument,
    MagicMismatch,
    NoFileSelected,
    UnsupportedContainer,
)
from gltf_geometry.loader import LoadResult, load_container, load_gltf, try_load_gltf
from gltf_geometry.logger import get_logger


def test_load_glb(triangle_glb):
    geometry = load_gltf(triangle_glb)
    assert geometry.indices.tolist() == TRIANGLE_INDICES
    assert geometry.positions.tolist() == TRIANGLE_POSITIONS


def test_load_gltf_with_companion_bin(triangle_gltf):
    geometry = load_gltf(str(triangle_gltf))
    assert geometry.indices.tolist() == TRIANGLE_INDICES
    assert geometry.positions.tolist() == TRIANGLE_POSITIONS


def test_gltf_and_glb_decode_identically(triangle_glb, triangle_gltf):
    from_glb = load_gltf(triangle_glb)
    from_gltf = load_gltf(triangle_gltf)
    assert from_glb.indices.tobytes() == from_gltf.indices.tobytes()
    assert from_glb.positions.tobytes() == from_gltf.positions.tobytes()


def test_load_gltf_with_embedded_buffer(tmp_path, triangle_scene):
    document, bin_data = triangle_scene
    uri = "data:application/octet-stream;base64," + base64.b64encode(bin_data).decode("ascii")
    document["buffers"] = [{"uri": uri, "byteLength": len(bin_data)}]
    path = tmp_path / "embedded.gltf"
    path.write_text(json.dumps(document), encoding="utf-8")

    assert load_gltf(path).positions.tolist() == TRIANGLE_POSITIONS


def test_load_container_returns_document_and_segment(triangle_gltf, triangle_scene):
    _, bin_data = triangle_scene
    document, segment = load_container(triangle_gltf)
    assert document["buffers"][0]["uri"] == "triangle.bin"
    assert segment == bin_data


def test_missing_companion(triangle_gltf):
    (triangle_gltf.parent / "triangle.bin").unlink()
    with pytest.raises(CompanionNotFound) as info:
        load_gltf(triangle_gltf)
    assert info.value.path.name == "triangle.bin"


def test_missing_input(tmp_path):
    with pytest.raises(InputNotFound):
        load_gltf(tmp_path / "nothing.glb")


@pytest.mark.parametrize("path", [None, ""])
def test_no_file_selected(path):
    with pytest.raises(NoFileSelected):
        load_gltf(path)


def test_unsupported_container(tmp_path):
    path = tmp_path / "model.obj"
    path.write_text("v 0 0 0\n")
    with pytest.raises(UnsupportedContainer) as info:
        load_gltf(path)
    assert info.value.extension == ".obj"


def test_try_load_success(triangle_glb):
    result = try_load_gltf(triangle_glb, DecodeOptions(position_dtype="float32"))
    assert result.ok
    assert result.error is None
    assert result.unwrap().vertex_count == 3


def test_try_load_failure(tmp_path, triangle_scene):
    document, bin_data = triangle_scene
    path = tmp_path / "bad.glb"
    path.write_bytes(glb_bytes(document, bin_data, magic=b"GLTF"))

    result = try_load_gltf(path)
    assert not result.ok
    assert result.geometry is None
    assert isinstance(result.error, MagicMismatch)
    with pytest.raises(MagicMismatch):
        result.unwrap()


def test_try_load_no_file():
    assert isinstance(try_load_gltf(None).error, NoFileSelected)


def test_load_result_defaults():
    assert LoadResult().ok
    with pytest.raises(ValueError):
        LoadResult().unwrap()


def test_try_load_malformed_primitive(tmp_path, triangle_scene):
    document, bin_data = triangle_scene
    document["meshes"][0]["primitives"].append(None)
    path = tmp_path / "malformed.glb"
    path.write_bytes(glb_bytes(document, bin_data))

    result = try_load_gltf(path)
    assert not result.ok
    assert isinstance(result.error, InvalidDocument)


def test_skipped_accessors_are_logged(tmp_path, triangle_scene, caplog):
    document, bin_data = triangle_scene
    document["accessors"][1]["componentType"] = 5124
    path = tmp_path / "skip.glb"
    path.write_bytes(glb_bytes(document, bin_data))

    with caplog.at_level(logging.WARNING, logger="gltf_geometry"):
        geometry = load_gltf(path)

    assert geometry.indices.tolist() == []
    assert any("unsupported componentType 5124" in record.getMessage() for record in caplog.records)


def test_logger_namespace():
    assert get_logger("loader").name == "gltf_geometry.loader"
    assert get_logger("gltf_geometry.loader").name == "gltf_geometry.loader"
