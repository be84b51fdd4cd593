"""
Command line access to a stored pedigree.

    pedigree ids            PEDIGREE.json                  linked patient ids
    pedigree individuals    PEDIGREE.json                  linked individuals as JSON
    pedigree proband        PEDIGREE.json                  proband id and last name
    pedigree consanguinity  PEDIGREE.json                  parental consanguinity per person
    pedigree validate       PEDIGREE.json [--image SVG]    structural warnings
    pedigree render         PEDIGREE.json --image SVG      highlighted/resized SVG
    pedigree unlink         PEDIGREE.json --image SVG ID   remove a patient link, in place
    pedigree plot           PEDIGREE.json [--output FILE]  Graphviz drawing of the structure
"""

import argparse
import json
from pathlib import Path
import sys

from config import Settings
from consanguinity import consanguinity_by_person
from logging_config import configure_logging
from parsing import load_pedigree_file, save_pedigree_file
from pedigree import Pedigree
from plotting import plot_pedigree


def load_pedigree(args: argparse.Namespace) -> Pedigree:
    image = args.image.read_text(encoding="utf-8") if args.image else ""
    return Pedigree(load_pedigree_file(args.pedigree), image)


def format_tristate(value: bool | None) -> str:
    if value is None:
        return "unknown"
    return "yes" if value else "no"


def cmd_ids(pedigree: Pedigree, args: argparse.Namespace) -> int:
    for patient_id in pedigree.extract_ids():
        print(patient_id)
    return 0


def cmd_individuals(pedigree: Pedigree, args: argparse.Namespace) -> int:
    print(json.dumps(pedigree.extract_patient_properties(), indent=2))
    return 0


def cmd_proband(pedigree: Pedigree, args: argparse.Namespace) -> int:
    info = pedigree.proband
    if info.id is None:
        print("No proband linked to a patient")
        return 0
    print(f"{info.id}\t{info.last_name or ''}")
    return 0


def cmd_consanguinity(pedigree: Pedigree, args: argparse.Namespace) -> int:
    for node_id, value in consanguinity_by_person(pedigree.graph):
        print(f"{node_id}\t{format_tristate(value)}")
    return 0


def cmd_validate(pedigree: Pedigree, args: argparse.Namespace) -> int:
    warnings = pedigree.validate()
    if not warnings:
        print("No validation issues found")
        return 0

    print(f"Found {len(warnings)} validation warnings:")
    for w in warnings:
        print(f"  - {w}")
    return 2 if args.strict else 0


def cmd_render(pedigree: Pedigree, args: argparse.Namespace) -> int:
    settings: Settings = args.settings
    width = args.width if args.width is not None else settings.image_width
    height = args.height if args.height is not None else settings.image_height
    print(pedigree.get_image(args.highlight, width, height))
    return 0


def cmd_unlink(pedigree: Pedigree, args: argparse.Namespace) -> int:
    before = len(pedigree.extract_ids())
    pedigree.remove_link(args.patient_id)
    removed = before - len(pedigree.extract_ids())

    save_pedigree_file(args.pedigree, pedigree.data)
    if args.image:
        args.image.write_text(pedigree.image, encoding="utf-8")
    print(f"Removed {removed} link(s) to {args.patient_id}")
    return 0


def cmd_plot(pedigree: Pedigree, args: argparse.Namespace) -> int:
    plot_pedigree(pedigree.graph, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pedigree",
        description="Query and update pedigree data and its SVG rendering.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, handler, help_text: str, image_required: bool = False):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("pedigree", type=Path, help="Pedigree JSON file")
        sub.add_argument("--image", type=Path, required=image_required, help="Pedigree SVG file")
        sub.set_defaults(handler=handler)
        return sub

    add_command("ids", cmd_ids, "List linked patient ids")
    add_command("individuals", cmd_individuals, "Dump linked individuals as JSON")
    add_command("proband", cmd_proband, "Show the proband's patient id and last name")
    add_command("consanguinity", cmd_consanguinity, "Show parental consanguinity per person")

    validate = add_command("validate", cmd_validate, "Report structural problems")
    validate.add_argument("--strict", action="store_true", help="Exit with status 2 on warnings")

    render = add_command("render", cmd_render, "Print the SVG", image_required=True)
    render.add_argument("--highlight", help="Patient id to highlight")
    render.add_argument("--width", type=int)
    render.add_argument("--height", type=int)

    unlink = add_command("unlink", cmd_unlink, "Remove a patient link", image_required=True)
    unlink.add_argument("patient_id")

    plot = add_command("plot", cmd_plot, "Draw the structure with Graphviz")
    plot.add_argument("--output", type=Path, help="png, svg, pdf or dot file")

    return parser


def main(argv: list[str] | None = None) -> int:
    settings = Settings()
    configure_logging(settings.log_level, settings.log_json)

    args = build_parser().parse_args(argv)
    args.settings = settings

    try:
        pedigree = load_pedigree(args)
        return args.handler(pedigree, args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
