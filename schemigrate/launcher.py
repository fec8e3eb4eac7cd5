"""Entry point that hands commands to the project's migrate script."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence

from schemigrate import cli


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``init`` directly; run any other command through the migrate script."""
    args = list(sys.argv[1:] if argv is None else argv)

    if args and args[0] == "init":
        return cli.main(args)

    if not cli.MIGRATE_SCRIPT.exists():
        print("Error: please run 'schemigrate init'.")
        return 0

    try:
        result = subprocess.run(
            [sys.executable, str(cli.MIGRATE_SCRIPT), *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as exc:
        print("ERROR: ", exc)
        return 0

    if result.returncode != 0:
        print("ERROR: ", f"exit status {result.returncode}")
    print(result.stdout, end="")
    return 0