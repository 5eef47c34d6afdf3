"""Command line entry point.

Any choice not given as an option is asked for interactively::

    frcproj
    frcproj commandbased -d ~/robot -t 1778
    frcproj --example --list
    python -m frcproj timed -r ~/wpilib/2025/utility/resources/app/resources
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from .config import Config
from .errors import GenerationError, ManifestError
from .generator import generate
from .manifest import find_blueprint, load_blueprints
from .models import BlueprintDescriptor, BlueprintKind, GenerationRequest
from .resources import detect_layout, discover_resource_paths, validate_resource_path
from .utils import (
    console,
    expand_home,
    is_empty_dir,
    print_error,
    print_success,
    print_summary_table,
)


class CliError(Exception):
    """A command-line value was rejected."""


# ---------------------------------------------------------------------------
# Choices
# ---------------------------------------------------------------------------


def choose_resources_path(explicit: Path | None, config: Config) -> Path:
    """Return a valid resource library, asking the user when none was given."""
    if explicit is not None:
        path = explicit.expanduser()
        problem = validate_resource_path(path)
        if problem:
            raise CliError(f"{path}: {problem}")
        return path

    detected = discover_resource_paths(config.wpilib_home_path)
    if detected:
        console.print("the following resource paths were detected:")
        for index, path in enumerate(detected, start=1):
            console.print(f"  [{index}] {path}", markup=False)

    while True:
        if detected:
            response = Prompt.ask(
                "what path would you like to use? "
                "(enter one of the numbers above or your own path)",
                default="1",
                show_default=False,
            )
            if response.isdigit():
                number = int(response)
                if 1 <= number <= len(detected):
                    return detected[number - 1]
                console.print("number out of range, try again")
                continue
        else:
            response = Prompt.ask("what path would you like to use?")

        path = expand_home(response)
        problem = validate_resource_path(path)
        if problem is None:
            return path
        console.print(problem)


def check_destination(path: Path) -> str | None:
    """Create *path* if missing; return a problem if it can't be used."""
    if not path.exists():
        path.mkdir(parents=True)
        return None
    if not path.is_dir():
        return "that path isn't a directory!"
    if not is_empty_dir(path):
        return "that path contains files already!"
    return None


def choose_destination(explicit: Path | None) -> Path:
    """Return an empty destination directory, asking the user when none was given."""
    if explicit is not None:
        path = explicit.expanduser()
        problem = check_destination(path)
        if problem:
            raise CliError(f"{path}: {problem}")
        return path

    while True:
        path = expand_home(Prompt.ask("which path would you like to create the project in?"))
        problem = check_destination(path)
        if problem is None:
            return path
        console.print(problem)


def choose_blueprint(
    blueprints: Sequence[BlueprintDescriptor],
    query: str | None,
    kind: BlueprintKind,
) -> BlueprintDescriptor:
    """Pick a blueprint by name, or the first one whose name starts with the answer."""
    if query is not None:
        blueprint = find_blueprint(blueprints, query)
        if blueprint is None:
            raise CliError(f"no {kind.label} named '{query}'")
        return blueprint

    console.print(f"the following {kind.code_dir} are available:")
    for blueprint in blueprints:
        console.print(f"  [{blueprint.name}]: {blueprint.description}", markup=False)

    while True:
        answer = Prompt.ask(f"which {kind.label} would you like to use?")
        blueprint = find_blueprint(blueprints, answer)
        if blueprint is None:
            console.print("invalid name, try again")
            continue
        if blueprint.name != answer:
            console.print(f"using {kind.label} {blueprint.name}")
        return blueprint


def choose_team_number(explicit: int | None) -> int:
    """Return a non-negative team number, asking the user when none was given."""
    if explicit is not None:
        if explicit < 0:
            raise CliError(f"invalid team number: {explicit}")
        return explicit

    while True:
        number = IntPrompt.ask("what is your team number?")
        if number >= 0:
            return number
        console.print("invalid number")


def print_blueprints(blueprints: Sequence[BlueprintDescriptor], kind: BlueprintKind) -> None:
    """Print the available blueprints as a table."""
    table = Table(title=f"Available {kind.code_dir}", show_header=True, header_style="bold cyan")
    table.add_column("Name", no_wrap=True)
    table.add_column("Build")
    table.add_column("Tests")
    table.add_column("Description")
    for blueprint in blueprints:
        table.add_row(
            blueprint.name,
            blueprint.build_variant,
            "yes" if blueprint.has_unit_tests else "",
            blueprint.description,
        )
    console.print(table)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frcproj",
        description="Create a WPILib robot project from an installed template or example",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  frcproj\n"
            "  frcproj commandbased -d ~/robot -t 1778\n"
            "  frcproj --example --list\n"
        ),
    )
    parser.add_argument(
        "blueprint",
        nargs="?",
        default=None,
        help="Template or example folder name (a prefix is enough)",
    )
    parser.add_argument(
        "--example", "-e",
        action="store_true",
        help="Choose from the examples instead of the templates",
    )
    parser.add_argument(
        "--resources", "-r",
        type=Path,
        default=None,
        help="Resource library directory (detected under ~/wpilib if omitted)",
    )
    parser.add_argument(
        "--destination", "-d",
        type=Path,
        default=None,
        help="Empty or missing directory to create the project in",
    )
    parser.add_argument("--team", "-t", type=int, default=None, help="Team number")
    parser.add_argument(
        "--package", "-p",
        default=None,
        help="Java package for the robot code (default: frc.robot)",
    )
    parser.add_argument(
        "--staged",
        action="store_true",
        default=None,
        help="Build in a scratch directory and only publish a complete project",
    )
    parser.add_argument("--list", action="store_true", help="List blueprints and exit")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``frcproj`` and ``python -m frcproj``."""
    args = build_parser().parse_args(argv)
    kind = BlueprintKind.EXAMPLE if args.example else BlueprintKind.TEMPLATE

    try:
        config = Config.load(args.config) if args.config else Config.from_env()
        resources = choose_resources_path(args.resources or config.resources_path, config)
        layout = detect_layout(resources)
        blueprints = load_blueprints(resources, kind, layout)
        if args.list:
            print_blueprints(blueprints, kind)
            return

        blueprint = choose_blueprint(blueprints, args.blueprint, kind)
        destination = choose_destination(args.destination)
        team_number = choose_team_number(args.team)
        request = GenerationRequest(
            resources_path=resources,
            destination=destination,
            blueprint=blueprint,
            team_number=team_number,
            package=args.package or config.default_package,
            layout=layout,
            staged=config.staged if args.staged is None else args.staged,
        )
        result = generate(request)
    except (CliError, GenerationError, ManifestError, ValidationError, OSError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    print_summary_table(result.as_dict(), title="Project created")
    print_success("project successfully created")


if __name__ == "__main__":
    main()
