from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import BindingPolicy, DecodeOptions
from .constants import component_type_name
from .errors import NoFileSelected
from .loader import try_load_gltf
from .logger import setup_logging


NUMERIC_TYPES = [
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "float16",
    "float32",
    "float64",
]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gltf-geometry",
        description="Decode the primitive indices and vertex positions of a .gltf or .glb file.",
    )
    parser.add_argument("path", nargs="?", type=Path, default=None, help="Input .gltf or .glb file")
    parser.add_argument("--index-type", default="int32", choices=NUMERIC_TYPES, help="Index element type (default: int32)")
    parser.add_argument(
        "--position-type",
        default="float64",
        choices=NUMERIC_TYPES,
        help="Position element type (default: float64)",
    )
    parser.add_argument(
        "--honor-stride",
        default=True,
        action=argparse.BooleanOptionalAction,
        help="Apply byteStride when reading interleaved data; --no-honor-stride reads every accessor as tightly packed (default: True)",
    )
    parser.add_argument(
        "--strict-component-types",
        action="store_true",
        help="Fail on accessors with an unsupported componentType instead of skipping them",
    )
    parser.add_argument(
        "--bindings",
        default=BindingPolicy.LAST_WINS.value,
        choices=[policy.value for policy in BindingPolicy],
        help="How primitives binding the same attribute combine: last primitive wins, or concatenate (default: last)",
    )
    parser.add_argument("--dump-json", action="store_true", help="Pretty-print the parsed glTF document")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Log file and decode details")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser.parse_args(argv)


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    if args.quiet:
        return logging.ERROR
    return logging.WARNING


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(_log_level(args))

    options = DecodeOptions(
        index_dtype=args.index_type,
        position_dtype=args.position_type,
        honor_byte_stride=args.honor_stride,
        strict_component_types=args.strict_component_types,
        binding_policy=BindingPolicy(args.bindings),
    )

    result = try_load_gltf(args.path, options)
    if isinstance(result.error, NoFileSelected):
        print("No file selected.", file=sys.stderr)
        return 1
    if result.error is not None:
        print(f"error: {result.error}", file=sys.stderr)
        return 2

    geometry = result.unwrap()
    if args.dump_json:
        print(json.dumps(geometry.document, indent=2, ensure_ascii=False))

    print(f"Indices: {len(geometry.indices)}")
    print(f"Vertices: {geometry.vertex_count}")
    for skipped in geometry.skipped:
        print(f"Skipped: {skipped.name} (accessor {skipped.accessor_index}, {component_type_name(skipped.component_type)})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
