from __future__ import annotations

import argparse
from typing import Callable

from .geometry import layout_bounds, section_center
from .log import configure_logging
from .models import Layout, LayoutError
from .storage import export_layout, load_layout, maybe_init_layout, save_layout
from .store import LayoutStore


DEFAULT_FILE = "seating_layout.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to layout JSON file (default: {DEFAULT_FILE})",
    )


def _apply(args: argparse.Namespace, command: Callable[[LayoutStore], object], done: str) -> int:
    """Load the file, run one store command, save only if the layout changed."""
    changed: list[Layout] = []
    store = LayoutStore(load_layout(args.file), on_layout_change=changed.append)
    command(store)
    if not changed:
        print("Nothing changed (unknown section/seat id, or a label section)")
        return 1
    save_layout(store.layout, args.file)
    print(done)
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    layout = maybe_init_layout(args.file, overwrite=args.overwrite)
    print(f"Initialized layout at {args.file} ({len(layout.sections)} sections)")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    for s in layout.sections:
        cx, cy = section_center(s)
        print(
            f"{s.id:<28} {s.type.value:<8} {s.name!r:<24} center=({cx:.1f}, {cy:.1f}) "
            f"size={s.width:.0f}x{s.height:.0f} rot={s.rotation:g} seats={len(s.seats)}"
        )
    bounds = layout_bounds(layout)
    if bounds is not None:
        print("bounds: ({:.1f}, {:.1f}) - ({:.1f}, {:.1f})".format(*bounds))
    print(f"total seats: {layout.total_seats}")
    return 0


def cmd_add_section(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.add_section(name=args.name, color=args.color), "Added section")


def cmd_add_label(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.add_label_section(name=args.name), "Added label")


def cmd_move_section(args: argparse.Namespace) -> int:
    return _apply(
        args,
        lambda st: st.move_section(args.id, args.x, args.y),
        f"Moved {args.id} to center ({args.x}, {args.y})",
    )


def cmd_transform(args: argparse.Namespace) -> int:
    return _apply(
        args,
        lambda st: st.transform_section(args.id, args.x, args.y, args.width, args.height, args.rotation),
        f"Transformed {args.id}",
    )


def cmd_rotate(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.rotate_section(args.id, args.rotation), f"Rotated {args.id} to {args.rotation:g} deg")


def cmd_duplicate(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.duplicate_section(args.id), f"Duplicated {args.id}")


def cmd_delete_section(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.delete_section(args.id), f"Deleted {args.id}")


def cmd_rename(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.rename_section(args.id, args.name), f"Renamed {args.id} to {args.name!r}")


def cmd_recolor(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.recolor_section(args.id, args.color), f"Recolored {args.id} to {args.color}")


def cmd_add_seat(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.add_seat(args.section, args.x, args.y), f"Added seat to {args.section}")


def cmd_move_seat(args: argparse.Namespace) -> int:
    return _apply(
        args,
        lambda st: st.move_seat(args.section, args.seat, args.x, args.y),
        f"Moved seat {args.seat}",
    )


def cmd_delete_seat(args: argparse.Namespace) -> int:
    return _apply(args, lambda st: st.delete_seat(args.section, args.seat), f"Deleted seat {args.seat}")


def cmd_rename_seat(args: argparse.Namespace) -> int:
    return _apply(
        args,
        lambda st: st.rename_seat(args.section, args.seat, args.new_id),
        f"Renamed seat {args.seat} to {args.new_id!r}",
    )


def cmd_fill(args: argparse.Namespace) -> int:
    return _apply(
        args,
        lambda st: st.fill_with_seats(args.section, args.rows, args.cols, args.seat_size),
        f"Filled {args.section} with {args.rows} x {args.cols} seats",
    )


def cmd_export(args: argparse.Namespace) -> int:
    doc = export_layout(load_layout(args.file), args.output)
    print(f"Exported {doc['totalSeats']} seats to {args.output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seating_layout", description="Venue seating layout editor (CLI).")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a layout file with the default sections")
    _add_common_args(p_init)
    p_init.add_argument("--overwrite", action="store_true", help="Overwrite existing layout file")
    p_init.set_defaults(func=cmd_init)

    p_show = sub.add_parser("show", help="List sections, seat counts and bounds")
    _add_common_args(p_show)
    p_show.set_defaults(func=cmd_show)

    p_add = sub.add_parser("add-section", help="Append a new seating section")
    _add_common_args(p_add)
    p_add.add_argument("--name")
    p_add.add_argument("--color")
    p_add.set_defaults(func=cmd_add_section)

    p_label = sub.add_parser("add-label", help="Append a label-only section")
    _add_common_args(p_label)
    p_label.add_argument("--name", default="Label")
    p_label.set_defaults(func=cmd_add_label)

    p_move = sub.add_parser("move-section", help="Move a section so its center lands on x,y")
    _add_common_args(p_move)
    p_move.add_argument("--id", required=True)
    p_move.add_argument("--x", type=float, required=True)
    p_move.add_argument("--y", type=float, required=True)
    p_move.set_defaults(func=cmd_move_section)

    p_tr = sub.add_parser("transform", help="Set a section's center, size and rotation")
    _add_common_args(p_tr)
    p_tr.add_argument("--id", required=True)
    p_tr.add_argument("--x", type=float, required=True)
    p_tr.add_argument("--y", type=float, required=True)
    p_tr.add_argument("--width", type=float, required=True)
    p_tr.add_argument("--height", type=float, required=True)
    p_tr.add_argument("--rotation", type=float, default=0.0)
    p_tr.set_defaults(func=cmd_transform)

    p_rot = sub.add_parser("rotate", help="Rotate a section around its center")
    _add_common_args(p_rot)
    p_rot.add_argument("--id", required=True)
    p_rot.add_argument("--rotation", type=float, required=True, help="Degrees, clockwise on screen")
    p_rot.set_defaults(func=cmd_rotate)

    p_dup = sub.add_parser("duplicate", help="Duplicate a section with its seats")
    _add_common_args(p_dup)
    p_dup.add_argument("--id", required=True)
    p_dup.set_defaults(func=cmd_duplicate)

    p_del = sub.add_parser("delete-section", help="Delete a section and its seats")
    _add_common_args(p_del)
    p_del.add_argument("--id", required=True)
    p_del.set_defaults(func=cmd_delete_section)

    p_ren = sub.add_parser("rename", help="Rename a section")
    _add_common_args(p_ren)
    p_ren.add_argument("--id", required=True)
    p_ren.add_argument("--name", required=True)
    p_ren.set_defaults(func=cmd_rename)

    p_col = sub.add_parser("recolor", help="Change a section's color")
    _add_common_args(p_col)
    p_col.add_argument("--id", required=True)
    p_col.add_argument("--color", required=True)
    p_col.set_defaults(func=cmd_recolor)

    p_seat = sub.add_parser("add-seat", help="Add a seat at a world position")
    _add_common_args(p_seat)
    p_seat.add_argument("--section", required=True)
    p_seat.add_argument("--x", type=float, required=True)
    p_seat.add_argument("--y", type=float, required=True)
    p_seat.set_defaults(func=cmd_add_seat)

    p_mseat = sub.add_parser("move-seat", help="Move a seat to a world position")
    _add_common_args(p_mseat)
    p_mseat.add_argument("--section", required=True)
    p_mseat.add_argument("--seat", required=True)
    p_mseat.add_argument("--x", type=float, required=True)
    p_mseat.add_argument("--y", type=float, required=True)
    p_mseat.set_defaults(func=cmd_move_seat)

    p_dseat = sub.add_parser("delete-seat", help="Delete a seat")
    _add_common_args(p_dseat)
    p_dseat.add_argument("--section", required=True)
    p_dseat.add_argument("--seat", required=True)
    p_dseat.set_defaults(func=cmd_delete_seat)

    p_rseat = sub.add_parser("rename-seat", help="Change a seat id")
    _add_common_args(p_rseat)
    p_rseat.add_argument("--section", required=True)
    p_rseat.add_argument("--seat", required=True)
    p_rseat.add_argument("--new-id", required=True)
    p_rseat.set_defaults(func=cmd_rename_seat)

    p_fill = sub.add_parser("fill", help="Replace a section's seats with a rows x cols grid")
    _add_common_args(p_fill)
    p_fill.add_argument("--section", required=True)
    p_fill.add_argument("--rows", type=int, required=True)
    p_fill.add_argument("--cols", type=int, required=True)
    p_fill.add_argument("--seat-size", type=float, help="Seat radius (default from settings)")
    p_fill.set_defaults(func=cmd_fill)

    p_export = sub.add_parser("export", help="Write the export document (sections, scale, exportDate, totalSeats)")
    _add_common_args(p_export)
    p_export.add_argument("--output", required=True)
    p_export.set_defaults(func=cmd_export)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        configure_logging()
        return int(args.func(args))
    except LayoutError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
