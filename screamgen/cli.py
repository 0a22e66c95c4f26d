"""Command-line entry point.

``screamgen new`` generates a project from flags or a JSON specification file;
``screamgen add-domain`` adds one domain to a project generated earlier.
This module is the only place that talks to the user: it asks for overwrite
confirmation and renders the ``GenerationReport``.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from rich.prompt import Confirm

from screamgen import __version__
from screamgen.config import GeneratorSettings
from screamgen.scaffolder import (
    DomainExtender,
    PersistenceBackend,
    ProjectGenerator,
    ProjectSpecification,
    ScaffoldError,
    load_specification,
    validate_specification,
)
from screamgen.utils import (
    console,
    print_error,
    print_plan,
    print_report,
    print_success,
    setup_logging,
)

logger = logging.getLogger(__name__)

_BACKEND_CHOICES = [b.value for b in PersistenceBackend]


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screamgen",
        description="Generate domain-first (screaming architecture) Express projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  screamgen new shop --domains orders,users --backend postgresql --tests\n"
            "  screamgen new --spec-file shop.json -o ./projects --dry-run\n"
            "  screamgen add-domain billing --project ./projects/shop\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: SCREAMGEN_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--templates-dir",
        default=None,
        help="Directory whose templates override the bundled ones",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Generate a new project")
    new.add_argument("name", nargs="?", help="Project name (lowercase, hyphens allowed)")
    new.add_argument(
        "--domains",
        default="",
        help="Comma-separated domain names, e.g. orders,users",
    )
    new.add_argument(
        "--backend",
        default="none",
        choices=_BACKEND_CHOICES,
        help="Persistence backend (default: none)",
    )
    new.add_argument("--tests", action="store_true", help="Generate jest tests")
    new.add_argument("--docker", action="store_true", help="Generate Docker artifacts")
    new.add_argument("--description", default="", help="Project description")
    new.add_argument("--author", default="", help="Project author")
    new.add_argument("--version", dest="project_version", default="1.0.0", help="Project version")
    new.add_argument(
        "--spec-file",
        default=None,
        help="JSON specification file (replaces the flags above)",
    )
    new.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory of the project (default: SCREAMGEN_OUTPUT_DIR or .)",
    )
    new.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing project without asking",
    )
    new.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generation plan without writing anything",
    )

    add = subparsers.add_parser("add-domain", help="Add a domain to an existing project")
    add.add_argument("domain", help="Name of the new domain")
    add.add_argument(
        "--project", "-p",
        default=".",
        help="Root of the generated project (default: .)",
    )
    add.add_argument(
        "--backend",
        default=None,
        choices=_BACKEND_CHOICES,
        help="Override the backend inferred from package.json",
    )
    add.add_argument(
        "--tests",
        default=None,
        action=argparse.BooleanOptionalAction,
        help="Override whether tests are generated (default: inferred)",
    )
    add.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the plan without writing anything",
    )
    return parser


def _specification_from_args(args: argparse.Namespace) -> ProjectSpecification:
    if args.spec_file:
        return load_specification(args.spec_file)
    if not args.name:
        raise ScaffoldError("A project name is required (or use --spec-file)")
    data: dict[str, Any] = {
        "name": args.name,
        "description": args.description,
        "author": args.author,
        "version": args.project_version,
        "domains": [d.strip() for d in args.domains.split(",") if d.strip()],
        "include_tests": args.tests,
        "include_container_artifacts": args.docker,
        "persistence_backend": args.backend,
    }
    return validate_specification(data)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def run_new(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    spec = _specification_from_args(args)
    output_dir = Path(args.output) if args.output else settings.output_dir
    generator = ProjectGenerator(spec, output_dir, settings=settings)

    if args.dry_run:
        print_plan(generator.build_plan(), title=f"Plan for {spec.name}")
        return 0

    overwrite = args.force
    if not overwrite and await generator.fs.exists("."):
        overwrite = Confirm.ask(
            f"[yellow]{generator.project_root} already exists. Overwrite generated files?[/yellow]",
            default=False,
            console=console,
        )
        if not overwrite:
            console.print("Aborted; nothing was written.")
            return 1

    with console.status(f"Generating {spec.name}..."):
        report = await generator.generate(overwrite_confirmed=overwrite)

    print_report(report, title=f"Generated {spec.name}")
    print_success(f"Project ready at {report.project_root}")
    return 0


async def run_add_domain(args: argparse.Namespace, settings: GeneratorSettings) -> int:
    extender = DomainExtender(args.project, settings=settings)

    if args.dry_run:
        plan = await extender.plan_domain(
            args.domain, persistence_backend=args.backend, include_tests=args.tests
        )
        print_plan(plan, title=f"Plan for domain {args.domain}")
        return 0

    report = await extender.add_domain(
        args.domain, persistence_backend=args.backend, include_tests=args.tests
    )
    print_report(report, title=f"Added {args.domain}")
    print_success(f"Domain {args.domain} added to {report.project_root}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``screamgen`` / ``python -m screamgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = GeneratorSettings.from_env()
    if args.templates_dir:
        settings = settings.model_copy(update={"templates_dir": Path(args.templates_dir)})
    setup_logging(args.log_level or settings.log_level)

    command = run_new if args.command == "new" else run_add_domain
    try:
        code = asyncio.run(command(args, settings))
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print_error("Interrupted")
        sys.exit(130)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
