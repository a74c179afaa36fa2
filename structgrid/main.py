import argparse
import sys

from structgrid.layout import FieldSize, compute_layout
from structgrid.persistence import DEFAULT_STATE_PATH, FieldListError, load_fields


def parse_field_list(value):
    """Parse a comma separated list of size tags, e.g. 'u8,u32,u16'"""
    tags = [t for t in value.split(",") if t.strip()]
    try:
        return [FieldSize.from_label(t) for t in tags]
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="StructGrid - C struct layout and alignment visualizer"
    )
    parser.add_argument(
        "-s", "--state",
        default=DEFAULT_STATE_PATH,
        help=f"Field list state file (default: {DEFAULT_STATE_PATH})"
    )
    parser.add_argument(
        "-f", "--fields",
        type=parse_field_list,
        help="Comma separated field sizes overriding the saved list (e.g. u8,u128)"
    )
    parser.add_argument(
        "-w", "--cell-width",
        type=int,
        default=None,
        help="Terminal columns per byte in the address grid"
    )
    parser.add_argument(
        "-e", "--export",
        help="Export an SVG of the grid to this file and exit"
    )
    return parser.parse_args(argv)


def export(args):
    from structgrid.svg_exporter import create_svg

    fields = args.fields
    if fields is None:
        try:
            fields = load_fields(args.state)
        except (OSError, FieldListError) as e:
            print(f"Could not load {args.state}: {e}", file=sys.stderr)
            return 1
    layout = compute_layout(fields)
    try:
        with open(args.export, "w", encoding="utf-8") as f:
            f.write(create_svg(layout, title=" ".join(layout.struct_declaration())))
    except OSError as e:
        print(f"Could not write {args.export}: {e}", file=sys.stderr)
        return 1
    print(f"Exported {args.export} (size {layout.total_size}, align {layout.alignment})")
    return 0


def main(argv=None):
    args = parse_args(argv)

    if args.cell_width is not None and args.cell_width < 1:
        print("--cell-width must be at least 1", file=sys.stderr)
        return 2

    if args.export:
        return export(args)

    from structgrid.app import StructGridApp
    app = StructGridApp(state_path=args.state, fields=args.fields, cell_width=args.cell_width)
    app.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
