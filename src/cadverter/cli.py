"""Command-line interface for cadverter."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .bounds import compute_bounds
from .dxf_reader import inventory, read_dxf
from .export import (
    COLOR_MODES,
    PAPER_SIZES,
    QUALITY_SCALES,
    ExportSettings,
    export_transform,
    line_width,
    page_size,
    scale_label,
)
from .models import Transform
from .transforms import preview_transform


def _require_file(path_arg: str) -> Path:
    input_path = Path(path_arg)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)
    return input_path


def _print_transform(transform: Transform) -> None:
    print(f"Convention:   {transform.convention.value}")
    print(f"Scale:        {transform.scale:.6f}")
    print(f"Offset:       ({transform.offset_x:.3f}, {transform.offset_y:.3f})")
    print(f"Scaled size:  {transform.scaled_width:.3f} x {transform.scaled_height:.3f}")


# --- Subcommand handlers ---


def _cmd_inspect(args: argparse.Namespace) -> None:
    """Handle the inspect subcommand."""
    for path_arg in args.input:
        input_path = _require_file(path_arg)
        inv = inventory(read_dxf(input_path))

        print(f"DXF File: {input_path}")
        if inv.is_placeholder:
            print("No supported entities found; showing placeholder drawing")
        print()

        if inv.bounds:
            bb = inv.bounds
            print(f"Bounds: ({bb.min_x:.3f}, {bb.min_y:.3f}) to ({bb.max_x:.3f}, {bb.max_y:.3f})")
            print(f"Extent: {bb.width:.3f} x {bb.height:.3f}")
            print()

        print("Layers:")
        for layer_name in sorted(inv.layers.keys()):
            count = inv.layers[layer_name]
            print(f"  {layer_name or '(none)':30s} {count:5d} entities")
        print()

        print("Entity types:")
        for kind in sorted(inv.entity_counts.keys()):
            print(f"  {kind:20s} {inv.entity_counts[kind]:5d}")
        print()

        total = sum(inv.entity_counts.values())
        print(f"Total entities: {total}")


def _cmd_layout(args: argparse.Namespace) -> None:
    """Handle the layout subcommand."""
    input_path = _require_file(args.input)
    bounds = compute_bounds(read_dxf(input_path))

    try:
        if args.target == "preview":
            transform = preview_transform(
                bounds, args.width, args.height, zoom=args.zoom,
            )
            print(f"Target:       preview {args.width:g} x {args.height:g} px, zoom {args.zoom:g}")
        else:
            settings = ExportSettings(
                paper_size=args.paper,
                orientation=args.orientation,
                scale=args.scale,
                quality=args.quality,
                color_mode=args.color_mode,
                margin=args.margin,
                header_space=args.header_space,
            )
            transform = export_transform(bounds, settings)
            page_w, page_h = page_size(settings)
            print(f"Target:       {settings.paper_size} {settings.orientation} "
                  f"({page_w:g} x {page_h:g} mm), scale {scale_label(settings)}")
            print(f"Line width:   {line_width(settings.quality):.3f} mm")
            print(f"Color mode:   {settings.color_mode}")
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    _print_transform(transform)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cadverter",
        description="Parse DXF drawings and compute their preview/export layout.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log parser decisions (rejected records, placeholder substitution)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- inspect subcommand ---
    p_inspect = subparsers.add_parser(
        "inspect",
        help="Parse DXF files and print an entity/layer summary.",
    )
    p_inspect.add_argument(
        "input",
        nargs="+",
        help="Path(s) to DXF files",
    )
    p_inspect.set_defaults(func=_cmd_inspect)

    # --- layout subcommand ---
    p_layout = subparsers.add_parser(
        "layout",
        help="Print the drawing-to-target transform for preview or export.",
    )
    p_layout.add_argument(
        "input",
        help="Path to the DXF file",
    )
    p_layout.add_argument(
        "--target",
        choices=["export", "preview"],
        default="export",
        help="Render target (default: export)",
    )
    p_layout.add_argument(
        "--paper",
        choices=sorted(PAPER_SIZES),
        default="a4",
        help="Paper size for export (default: a4)",
    )
    p_layout.add_argument(
        "--orientation",
        choices=["portrait", "landscape"],
        default="portrait",
    )
    p_layout.add_argument(
        "--scale",
        default="auto",
        help="'auto' to fit the page, or a fixed multiplier such as 0.5 (default: auto)",
    )
    p_layout.add_argument(
        "--quality",
        choices=list(QUALITY_SCALES),
        default="high",
    )
    p_layout.add_argument(
        "--color-mode",
        choices=list(COLOR_MODES),
        default="color",
    )
    p_layout.add_argument("--margin", type=float, default=15.0, help="Page margin in mm")
    p_layout.add_argument("--header-space", type=float, default=25.0, help="Header band in mm")
    p_layout.add_argument("--width", type=float, default=800.0, help="Preview width in px")
    p_layout.add_argument("--height", type=float, default=600.0, help="Preview height in px")
    p_layout.add_argument("--zoom", type=float, default=1.0, help="Preview zoom factor")
    p_layout.set_defaults(func=_cmd_layout)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    args.func(args)
