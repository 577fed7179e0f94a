"""Command line front end: load a database and run queries read from stdin."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Iterable, Iterator, Optional, Sequence

from .deletions import delete
from .models import Secretariat, read_secretariat
from .queries import select
from .updates import update

_COUNT = re.compile(r"\s*([+-]?\d+)")


def execute(secretariat: Secretariat, line):
    """Run one query line and return the output lines it produces.

    A line may hold ``SELECT``, ``DELETE`` or ``UPDATE``; each keyword
    present is acted on in that order. Lines naming none of them are ignored.
    """
    output: list[str] = []
    if "SELECT" in line:
        output.extend(select(secretariat, line))
    if "DELETE" in line:
        delete(secretariat, line)
    if "UPDATE" in line:
        update(secretariat, line)
    return output


def run(secretariat: Secretariat, lines: Iterable[str]) -> Iterator[str]:
    """Run every query line in turn, yielding the output lines."""
    for line in lines:
        yield from execute(secretariat, line)


def _query_lines(text: str) -> list[str]:
    """Split stdin into the query lines announced by its leading count.

    The count is followed by the rest of its own line, which is read as the
    first of ``count + 1`` lines.
    """
    match = _COUNT.match(text)
    if match is None:
        raise ValueError("input must start with the number of queries")
    count = int(match.group(1))
    if count < 0:
        return []
    return text[match.end():].splitlines(keepends=True)[: count + 1]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the database named on the command line and answer queries from stdin."""
    parser = argparse.ArgumentParser(
        prog="secretariat",
        description="Run SELECT, DELETE and UPDATE queries against a secretariat database.",
    )
    parser.add_argument("database", help="path of the database file")
    arguments = parser.parse_args(argv)

    try:
        secretariat = read_secretariat(arguments.database)
        lines = _query_lines(sys.stdin.read())
        for output in run(secretariat, lines):
            print(output)
    except (OSError, ValueError) as error:
        print(f"secretariat: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())