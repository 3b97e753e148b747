"""Command-line entry points.

Three console scripts are installed:

    materialize-example <identifier> <output-dir>
    materialize-category <identifier> <output-dir>
    generate-docs <identifier> [output-dir] | --all [output-dir]

Each entry point returns the process exit status.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.markup import escape

from fhevm_hub.catalog.models import Identifier, IdentifierKind
from fhevm_hub.catalog.registry import Catalog
from fhevm_hub.config import HubConfig
from fhevm_hub.errors import HubError, UnknownIdentifier
from fhevm_hub.reporter.docs import DocEmitter
from fhevm_hub.scaffolder.materializer import MaterializationRequest, TemplateMaterializer
from fhevm_hub.utils import console, err_console, print_error, print_success, print_summary_table


class _UsageError(Exception):
    """Raised by ``_ArgumentParser`` instead of exiting with status 2."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _identifier(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("identifier must not be empty")
    return value


def _add_hub_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hub-root",
        type=Path,
        default=None,
        help="Root of the example hub checkout (default: $FHEVM_HUB_ROOT or .)",
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Catalog YAML to use instead of the bundled one",
    )


def _config_from_args(args: argparse.Namespace) -> HubConfig:
    return HubConfig.from_env(hub_root=args.hub_root, catalog_path=args.catalog)


def _print_available(kind: IdentifierKind, identifiers: list[str]) -> None:
    label = "categories" if kind is IdentifierKind.CATEGORY else "examples"
    err_console.print(
        f"Available {label}: {escape(', '.join(sorted(identifiers)))}",
        soft_wrap=True,
    )


def _print_available_from_env(kind: IdentifierKind) -> None:
    """List valid identifiers when arguments could not be parsed."""
    try:
        catalog = Catalog.for_config(HubConfig.from_env())
    except HubError as exc:
        print_error(str(exc))
        return
    _print_available(kind, catalog.valid_ids(kind))


# ---------------------------------------------------------------------------
# materialize-example / materialize-category
# ---------------------------------------------------------------------------


def _materialize_parser(kind: IdentifierKind) -> _ArgumentParser:
    parser = _ArgumentParser(
        prog=f"materialize-{kind.value}",
        description=f"Create a standalone FHEVM project for one {kind.value}",
    )
    parser.add_argument("identifier", type=_identifier, help=f"{kind.value.capitalize()} identifier")
    parser.add_argument("output_dir", type=Path, help="Directory to create the project in")
    _add_hub_options(parser)
    return parser


def _materialize(kind: IdentifierKind, argv: list[str] | None) -> int:
    parser = _materialize_parser(kind)
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        err_console.print(escape(parser.format_usage().rstrip()), soft_wrap=True)
        print_error(str(exc))
        _print_available_from_env(kind)
        return 1

    config = _config_from_args(args)
    request = MaterializationRequest(
        identifier=Identifier(kind=kind, id=args.identifier),
        destination=args.output_dir,
    )

    try:
        catalog = Catalog.for_config(config)
        result = TemplateMaterializer(config, catalog).materialize(request)
    except UnknownIdentifier as exc:
        print_error(str(exc))
        _print_available(kind, exc.available)
        return 1
    except HubError as exc:
        print_error(str(exc))
        return 1

    print_success(f"{kind.value.capitalize()} '{args.identifier}' created successfully!")
    print_summary_table(
        {
            "Project": str(result.destination),
            "Artifacts": result.summary(),
            "Manifest": str(result.manifest_path),
        },
        title="Materialization",
    )
    install = "npm install --legacy-peer-deps" if kind is IdentifierKind.CATEGORY else "npm install"
    console.print("Next steps:")
    for step in (f"cd {result.destination}", install, "npm run compile", "npm run test"):
        console.print(f"  {escape(step)}", soft_wrap=True)
    return 0


def materialize_example_main(argv: list[str] | None = None) -> int:
    """Entry point for ``materialize-example``."""
    return _materialize(IdentifierKind.EXAMPLE, argv)


def materialize_category_main(argv: list[str] | None = None) -> int:
    """Entry point for ``materialize-category``."""
    return _materialize(IdentifierKind.CATEGORY, argv)


# ---------------------------------------------------------------------------
# generate-docs
# ---------------------------------------------------------------------------


def _docs_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog="generate-docs",
        description="Generate GitBook-compatible documentation for hub examples",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=(
            "Examples:\n"
            "  generate-docs fhe-counter\n"
            "  generate-docs fhe-counter ./site\n"
            "  generate-docs --category basic\n"
            "  generate-docs --all\n"
        ),
    )
    parser.add_argument(
        "identifier",
        nargs="?",
        type=_identifier,
        help="Example (or, with --category, category) identifier",
    )
    parser.add_argument("output_dir", nargs="?", type=Path, help="Output directory (default: ./docs)")
    parser.add_argument("--all", action="store_true", help="Regenerate documentation for every example")
    parser.add_argument("--category", action="store_true", help="Treat the identifier as a category")
    parser.add_argument("-h", "--help", action="store_true", help="Show this message and exit")
    _add_hub_options(parser)
    return parser


def generate_docs_main(argv: list[str] | None = None) -> int:
    """Entry point for ``generate-docs``."""
    parser = _docs_parser()
    try:
        args = parser.parse_args(argv)
    except _UsageError as exc:
        err_console.print(escape(parser.format_usage().rstrip()), soft_wrap=True)
        print_error(str(exc))
        return 1
    if args.all and args.identifier is not None and args.output_dir is not None:
        err_console.print(escape(parser.format_usage().rstrip()), soft_wrap=True)
        print_error(f"--all takes only an output directory; unexpected identifier '{args.identifier}'")
        return 1

    config = _config_from_args(args)
    try:
        catalog = Catalog.for_config(config)
    except HubError as exc:
        print_error(str(exc))
        return 1

    if args.help or (not args.all and args.identifier is None):
        console.print(escape(parser.format_help().rstrip()), soft_wrap=True)
        console.print(
            f"Available examples: {escape(', '.join(catalog.valid_ids(IdentifierKind.EXAMPLE)))}",
            soft_wrap=True,
        )
        return 0

    emitter = DocEmitter(config, catalog)
    try:
        if args.all:
            # With --all the single positional names the output directory.
            output_dir = args.output_dir or (Path(args.identifier) if args.identifier else None)
            emitter.emit_all(output_dir)
        else:
            kind = IdentifierKind.CATEGORY if args.category else IdentifierKind.EXAMPLE
            emitter.emit_doc(Identifier(kind=kind, id=args.identifier), args.output_dir)
    except UnknownIdentifier as exc:
        print_error(str(exc))
        _print_available(IdentifierKind(exc.kind), exc.available)
        return 1
    except HubError as exc:
        print_error(str(exc))
        return 1

    print_success("Documentation generated successfully!")
    return 0
