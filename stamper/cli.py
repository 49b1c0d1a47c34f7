"""Command-line entry point for the integration stamper.

Usage::

    python -m stamper --domain sales --envs dev,prod --workflow order-intake
    python -m stamper domains/sales.yaml --output ./integration --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.markup import escape

from stamper.config import StamperConfig, load_domain_spec, merge_spec
from stamper.scaffolder import DomainSpec, InvalidSpec, PlanWriter, ScaffoldPlan, generate
from stamper.scaffolder.models import DEFAULT_ENVIRONMENTS
from stamper.utils import (
    console,
    print_error,
    print_resource_table,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stamper",
        description="Stamp an integration domain folder from the naming conventions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  stamper --domain sales --envs dev,sit,uat,prod\n"
            "  stamper --domain hr --envs dev,prod --workflow onboarding -o ./repo\n"
            "  stamper domains/sales.yaml --dry-run\n"
        ),
    )
    parser.add_argument(
        "spec",
        nargs="?",
        default=None,
        help="Optional JSON or YAML domain spec file; flags override its values",
    )
    parser.add_argument("--domain", "-d", default=None, help="Domain name, e.g. sales")
    parser.add_argument(
        "--envs", "-e",
        default=None,
        help=f"Comma-separated environments (default: {','.join(DEFAULT_ENVIRONMENTS)})",
    )
    parser.add_argument(
        "--prefix", "-p",
        default=None,
        help="Naming prefix for shared platform resources",
    )
    parser.add_argument(
        "--workflow", "-w",
        action="append",
        default=None,
        help="Logical workflow name; repeat for several workflows",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Output root (default: STAMPER_OUTPUT_DIR or the current directory)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON settings file (default: STAMPER_* environment variables)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the plan without writing anything",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite files that already exist",
    )
    return parser


def parse_environments(value: str) -> list[str]:
    """Split a comma-separated environment list, dropping blanks."""
    return [e.strip() for e in value.split(",") if e.strip()]


def resolve_spec(args: argparse.Namespace, config: StamperConfig) -> DomainSpec:
    """Merge the spec file, config defaults and command-line flags."""
    overrides = {
        "name": args.domain,
        "environments": parse_environments(args.envs) if args.envs is not None else None,
        "shared_prefix": args.prefix,
        "workflows": args.workflow,
    }
    defaults = {"shared_prefix": config.shared_prefix}
    if args.spec:
        return load_domain_spec(args.spec, defaults, **overrides)

    if args.domain is None:
        raise InvalidSpec("name", "a domain name is required (--domain or a spec file)")
    defaults["environments"] = list(DEFAULT_ENVIRONMENTS)
    return merge_spec({}, defaults, **overrides)


def load_config(path: Optional[str]) -> StamperConfig:
    """Read settings from *path*, or from the environment when it is unset."""
    if path is None:
        return StamperConfig.from_env()
    return StamperConfig.load(Path(path))


def _print_plan(plan: ScaffoldPlan) -> None:
    print_resource_table(plan.resources, title=f"Resource names: {plan.domain}")
    print_summary_table(
        {f.path: f"{len(f.content.encode('utf-8'))} bytes" for f in plan.files},
        title="Planned files",
    )


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``python -m stamper``."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        print_error(f"Error: could not load config {args.config}: {escape(str(exc))}")
        sys.exit(1)

    if args.spec and not Path(args.spec).exists():
        print_error(f"Error: spec file not found: {args.spec}")
        sys.exit(1)

    try:
        plan = generate(resolve_spec(args, config))
    except InvalidSpec as exc:
        print_error(f"Invalid spec: {escape(str(exc))}")
        sys.exit(1)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        print_error(f"Error: could not parse {args.spec}: {escape(str(exc))}")
        sys.exit(1)
    except OSError as exc:
        print_error(f"Error: could not read {args.spec}: {escape(str(exc))}")
        sys.exit(1)

    _print_plan(plan)
    if args.dry_run:
        print_warning("Dry run: nothing was written.")
        return

    output_dir = Path(args.output) if args.output else config.output_dir
    writer = PlanWriter(overwrite=args.force or config.overwrite)
    try:
        written = asyncio.run(writer.write(plan, output_dir))
    except FileExistsError as exc:
        print_error(f"Error: {escape(str(exc))}")
        console.print("Re-run with --force to overwrite.")
        sys.exit(1)

    print_success(
        f"Stamped {len(written)} files for domain '{plan.domain}' into {output_dir}"
    )


if __name__ == "__main__":
    main()
