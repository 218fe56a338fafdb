#!/usr/bin/env python3
"""
VoidFX — Procedural Space Effects
CLI entry point. Also importable as a library.

Usage:
    python voidfx.py list-effects
    python voidfx.py info blackhole
    python voidfx.py render blackhole -o hole.png --time 2.5
    python voidfx.py render blackhole -o hole.png --params radius=0.08 --params "center=(0.4,0.5)"
    python voidfx.py render lensing -o lensed.png --source frame.png --workers 4
    python voidfx.py sequence spacetimerip -o frames/ --frames 60 --fps 30
"""

import sys
import os
import argparse
import logging

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from core.render import frame_times, render_frame, render_sequence, save_png
from core.source import SourceImage
from effects import (
    CATEGORIES, EFFECTS, list_categories, list_effects, make_params, search_effects,
)

__version__ = "0.1.0"

MAX_PARAMS = 32


def _parse_param_value(val: str):
    """Safely parse a CLI parameter value (number, tuple, or string)."""
    # Tuple: "(0.5, 0.5)" → (0.5, 0.5)
    if val.startswith('(') and val.endswith(')'):
        parts = val.strip('()').split(',')
        if len(parts) > 4:
            raise ValueError(f"Tuple too long (max 4 elements): {val}")
        parsed = []
        for p in parts:
            p = p.strip()
            if not p:
                raise ValueError(f"Empty tuple element in: {val}")
            f = float(p)
            if f != f or f in (float('inf'), float('-inf')):
                raise ValueError(f"NaN/Inf not allowed: {val}")
            parsed.append(f)
        return tuple(parsed)

    # Reject NaN/Inf as standalone strings
    if val.lower().strip() in ('nan', 'inf', '-inf', '+inf', 'infinity', '-infinity'):
        raise ValueError(f"NaN/Inf not allowed: {val}")

    try:
        f = float(val)
    except ValueError:
        return val  # Keep as string
    if f != f or f in (float('inf'), float('-inf')):
        raise ValueError(f"NaN/Inf not allowed: {val}")
    return f


def _parse_params(pairs) -> dict:
    """Turn ["k=v", ...] into a dict of parsed values."""
    pairs = pairs or []
    if len(pairs) > MAX_PARAMS:
        raise ValueError(f"Too many --params (max {MAX_PARAMS})")
    params = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"Expected key=value, got: {pair}")
        key, val = pair.split("=", 1)
        key = key.strip()
        if key in ("effect", "time"):
            raise ValueError(f"'{key}' cannot be set with --params")
        params[key] = _parse_param_value(val.strip())
    return params


def _build(args):
    overrides = _parse_params(args.params)
    params = make_params(args.effect_name, time=args.time, **overrides)
    source = SourceImage.open(args.source) if args.source else None
    return params, source


def cmd_list_effects(args):
    """List all available effects, grouped by category."""
    total = 0
    for cat_key, cat_label in CATEGORIES.items():
        if args.category and cat_key != args.category:
            continue
        effects = list_effects(category=cat_key)
        total += len(effects)
        print(f"\n  {cat_label} ({len(effects)})")
        print(f"  {'-' * 50}")
        for e in effects:
            print(f"    {e['name']:18s} {e['description']}")
            if not args.compact:
                params_str = ", ".join(f"{k}={v}" for k, v in e["params"].items())
                print(f"    {'':18s} Params: {params_str}")
    print(f"\n  Total: {total} effects")
    print(f"  Use 'voidfx info <effect>' for details.\n")


def cmd_info(args):
    """Show detailed info about a single effect."""
    name = args.effect_name
    if name not in EFFECTS:
        matches = [n for n in EFFECTS if name in n]
        if matches:
            print(f"Unknown effect: {name}. Did you mean: {', '.join(matches)}?")
        else:
            print(f"Unknown effect: {name}. Use 'voidfx list-effects' to see all.")
        return

    entry = EFFECTS[name]
    print(f"\n  {name}")
    print(f"  {'-' * 40}")
    print(f"  Category:    {CATEGORIES[entry['category']]}")
    print(f"  Description: {entry['description']}")
    if entry["needs_source"]:
        print(f"  Requires:    --source <image>")
    print(f"\n  Parameters:")
    for field_name, field in entry["model"].model_fields.items():
        if field_name == "effect":
            continue
        desc = field.description or ""
        print(f"    {field_name:20s} = {field.default!s:24s} {desc}")
    print()


def cmd_search(args):
    """Search effects by name or description."""
    results = search_effects(args.query)
    if not results:
        print(f"No effects matching '{args.query}'.")
        return
    print(f"\n  Results for '{args.query}' ({len(results)} found):")
    for e in results:
        print(f"    {e['name']:18s} [{e['category']}] {e['description']}")
    print()


def cmd_render(args):
    """Render one frame to PNG."""
    params, source = _build(args)
    frame = render_frame(
        args.effect_name, params, args.width, args.height,
        source=source, workers=args.workers, validate=not args.no_validate,
    )
    path = save_png(frame, args.output)
    print(f"  Rendered {args.effect_name} at t={args.time:g}s -> {path}")


def cmd_sequence(args):
    """Render numbered PNG frames into a directory."""
    params, source = _build(args)
    times = frame_times(args.frames, fps=args.fps, start=args.time)

    def _progress(i, total):
        if (i + 1) % 10 == 0 or i + 1 == total:
            print(f"  Frame {i + 1}/{total}")

    frames = render_sequence(
        args.effect_name, params, args.width, args.height, times,
        source=source, workers=args.workers, validate=not args.no_validate,
        progress_callback=_progress,
    )
    for i, frame in enumerate(frames):
        save_png(frame, os.path.join(args.output, f"frame_{i:05d}.png"))
    print(f"  Wrote {len(times)} frames to {args.output}")


def _add_render_args(p):
    p.add_argument("effect_name", choices=sorted(EFFECTS), help="Effect name")
    p.add_argument("--width", type=int, default=800, help="Frame width in pixels")
    p.add_argument("--height", type=int, default=600, help="Frame height in pixels")
    p.add_argument("--time", type=float, default=0.0, help="Elapsed time in seconds")
    p.add_argument("--source", help="Source image (screendistortion, lensing)")
    p.add_argument("--params", action="append", metavar="KEY=VALUE",
                   help="Override a parameter, e.g. radius=0.08 or \"center=(0.4,0.5)\"")
    p.add_argument("--workers", type=int, default=1, help="Render threads")
    p.add_argument("--no-validate", action="store_true",
                   help="Render even if parameter ordering checks fail")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="voidfx",
        description="VoidFX: procedural black hole, space-time rip and lensing effects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command")

    # list-effects
    p = sub.add_parser("list-effects", help="List all available effects")
    p.add_argument("--category", choices=list_categories(), help="Filter by category")
    p.add_argument("--compact", action="store_true", help="Compact view (names only)")

    # info
    p = sub.add_parser("info", help="Show detailed info about an effect")
    p.add_argument("effect_name", help="Effect name")

    # search
    p = sub.add_parser("search", help="Search effects by name or description")
    p.add_argument("query", help="Search term")

    # render
    p = sub.add_parser("render", help="Render a single frame to PNG")
    _add_render_args(p)
    p.add_argument("-o", "--output", required=True, help="Output PNG path")

    # sequence
    p = sub.add_parser("sequence", help="Render a numbered PNG sequence")
    _add_render_args(p)
    p.add_argument("-o", "--output", required=True, help="Output directory")
    p.add_argument("--frames", type=int, default=30, help="Number of frames")
    p.add_argument("--fps", type=float, default=30.0, help="Frames per second")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        "list-effects": cmd_list_effects,
        "info": cmd_info,
        "search": cmd_search,
        "render": cmd_render,
        "sequence": cmd_sequence,
    }

    if args.command in commands:
        try:
            commands[args.command](args)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
