"""Package entry point for ``python -m call_reconciler``."""
from __future__ import annotations

import sys

from . import cli


def main(argv: list[str] | None = None) -> int:
    """Invoke the reconciliation CLI, printing usage when no arguments are given."""

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser = cli.build_parser(prog="python -m call_reconciler")
        parser.print_help()
        return 2

    return cli.main(argv)


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
