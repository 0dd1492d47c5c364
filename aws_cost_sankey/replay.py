"""
Replay of a previously written text projection
"""

from .exceptions import ParseError, SourceError
from .graph import CostRecord
from .utils import parse_amount

MIN_LINE_TOKENS = 3


def parse_line(line):
    """Parse "<parent> [<amount>] <child...>" into a CostRecord"""
    parts = line.split()
    if len(parts) < MIN_LINE_TOKENS:
        raise ParseError(f"invalid line format: {line!r}")

    parent = parts[0]
    amount = parse_amount(parts[1].strip("[]"))
    child = " ".join(parts[2:])
    return CostRecord(parent, child, amount)


def parse_lines(lines):
    return [parse_line(line) for line in lines if line]


def read_replay(input_file, graph):
    """
    Load a text projection into graph

    Each line is a final edge value, so it overwrites rather than accumulates.
    The whole file is parsed before the graph is touched.

    Returns:
        int: Number of edges read
    """
    print(f"Reading data from {input_file}")

    try:
        with open(input_file) as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise SourceError(f"failed to read {input_file}: {e}") from e

    records = parse_lines(lines)
    for record in records:
        graph.set(record.source, record.target, record.amount)

    print(f"✓ Loaded {len(records)} edges from {input_file}")
    return len(records)
