"""kvtestgen CLI: generate dbm fixtures and their JSON oracles."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _package_version() -> str:
    try:
        return get_version("kvtestgen")
    except PackageNotFoundError:
        return "dev"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    from ._internal.settings import DEFAULT_BACKEND
    from .store import available_backends

    parser.add_argument(
        "-n",
        dest="numeric_sync",
        action="store_true",
        help="Make DB numsync"
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=available_backends(),
        default=DEFAULT_BACKEND,
        help=f"Storage backend (default: {DEFAULT_BACKEND})"
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")


def _run_guarded(action) -> None:
    """Run ``action`` and turn failures into a message on stderr and exit 1."""
    from .errors import RunError

    try:
        action()
    except RunError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)


def main():
    """Entry point for ``testgen``: one plan, one store, one oracle."""
    from ._internal.settings import DEFAULT_PLAN
    from .kernel.plans import available_plans, get_plan

    plans = available_plans()
    parser = _ArgumentParser(
        prog="testgen",
        usage="%(prog)s -o output-db -j output-json [options]",
        description="Generate test data for a GNU dbm reader: a database plus a JSON description of its contents."
    )
    parser.add_argument(
        "-o",
        dest="db_file",
        metavar="DB-FILE",
        type=Path,
        default=None,
        help="Output db (required)"
    )
    parser.add_argument(
        "-j",
        dest="json_file",
        metavar="JSON-FILE",
        type=Path,
        default=None,
        help="Output JSON metadata to file (required)"
    )
    parser.add_argument(
        "-p",
        dest="plan",
        metavar="PLAN",
        default=DEFAULT_PLAN,
        help=f"Generate according to test-plan PLAN. Available plans: {', '.join(plans)}"
    )
    parser.add_argument(
        "--list-plans",
        action="store_true",
        help="List available test plans and exit."
    )
    _add_common_arguments(parser)

    args = parser.parse_args()

    if args.list_plans:
        for name in plans:
            print(f"{name}\t{get_plan(name).description}")
        sys.exit(0)

    if args.db_file is None or args.json_file is None:
        parser.print_help(sys.stderr)
        sys.exit(1)

    def _generate():
        from .api import run

        result = run(
            args.db_file,
            args.json_file,
            plan=args.plan,
            numeric_sync=args.numeric_sync,
            backend=args.backend,
        )
        if not args.quiet:
            print(f"[OK] Plan {result.plan} complete")
            print(f"  DB: {result.store_path}")
            print(f"  JSON: {result.json_path}")
            print(f"  Records: {result.records_written}")

    _run_guarded(_generate)
    sys.exit(0)


def main_data():
    """Entry point for ``testgen-data``: every plan into one directory."""
    parser = _ArgumentParser(
        prog="testgen-data",
        description="Generate <plan>.db<SUFFIX> and <plan>.json<SUFFIX> for every test plan."
    )
    parser.add_argument(
        "-d",
        "--out-dir",
        type=Path,
        default=Path("."),
        help="Output directory (default: current directory)"
    )
    parser.add_argument(
        "-s",
        "--suffix",
        default="",
        help="Suffix appended to every output file name, e.g. .le64"
    )
    _add_common_arguments(parser)

    args = parser.parse_args()

    def _generate():
        from .api import run_all_plans

        results = run_all_plans(
            args.out_dir,
            suffix=args.suffix,
            numeric_sync=args.numeric_sync,
            backend=args.backend,
        )
        if not args.quiet:
            print(f"[OK] Generated {len(results)} fixtures")
            for result in results:
                print(f"  {result.plan}: {result.store_path} ({result.records_written} records)")

    _run_guarded(_generate)
    sys.exit(0)


if __name__ == "__main__":
    main()
