import json

import pytest

from gltf_builders import glb_bytes
from gltf_geometry.cli import main, parse_args


def test_prints_counts(triangle_glb, capsys):
    assert main([str(triangle_glb)]) == 0
    out = capsys.readouterr().out
    assert "Indices: 3" in out
    assert "Vertices: 3" in out


def test_dump_json(triangle_gltf, capsys):
    assert main([str(triangle_gltf), "--dump-json", "-q"]) == 0
    out = capsys.readouterr().out
    document = json.loads(out[: out.index("Indices:")])
    assert document["buffers"][0]["uri"] == "triangle.bin"


def test_no_file_selected(capsys):
    assert main([]) == 1
    assert "No file selected." in capsys.readouterr().err


def test_decode_error_exit_status(tmp_path, triangle_scene, capsys):
    document, bin_data = triangle_scene
    path = tmp_path / "bad.glb"
    path.write_bytes(glb_bytes(document, bin_data, version=1))

    assert main([str(path)]) == 2
    assert "error: Invalid GLB version" in capsys.readouterr().err


def test_strict_component_types_flag(tmp_path, triangle_scene, capsys):
    document, bin_data = triangle_scene
    document["accessors"][1]["componentType"] = 5124
    path = tmp_path / "skip.glb"
    path.write_bytes(glb_bytes(document, bin_data))

    assert main([str(path), "-q"]) == 0
    assert "Skipped: indices (accessor 1, UNKNOWN(5124))" in capsys.readouterr().out
    assert main([str(path), "-q", "--strict-component-types"]) == 2


def test_parse_args_defaults():
    args = parse_args(["model.glb"])
    assert args.index_type == "int32"
    assert args.position_type == "float64"
    assert args.honor_stride is True
    assert args.bindings == "last"


def test_parse_args_options():
    args = parse_args(["model.glb", "--no-honor-stride", "--bindings", "concat", "--index-type", "uint16"])
    assert args.honor_stride is False
    assert args.bindings == "concat"
    assert args.index_type == "uint16"


def test_rejects_unknown_output_type():
    with pytest.raises(SystemExit):
        parse_args(["model.glb", "--index-type", "bool"])


def test_malformed_mesh_exit_status(tmp_path, triangle_scene, capsys):
    document, bin_data = triangle_scene
    document["meshes"].append(7)
    path = tmp_path / "malformed.glb"
    path.write_bytes(glb_bytes(document, bin_data))

    assert main([str(path)]) == 2
    assert "error: Invalid glTF: meshes[1] is not an object" in capsys.readouterr().err
