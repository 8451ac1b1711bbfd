"""Reading problem instances and original sequences from text files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from itertools import takewhile
from typing import Iterable, Iterator

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class InstanceFormatError(ValueError):
    """Raised when an instance file does not follow the expected layout."""


@dataclass
class SBHInstance:
    """One sequencing-by-hybridization problem."""

    n: int
    k: int
    start_oligo: str
    neg_errors: int
    has_repeats: bool
    pos_errors: int
    spectrum: list[str] = field(default_factory=list)


def _to_int(text: str, name: str) -> int:
    match = _LEADING_INT.match(text)
    if match is None:
        raise InstanceFormatError(f"Invalid value for {name}: {text!r}")
    return int(match.group(1))


def _next_line(lines: Iterator[str], name: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise InstanceFormatError(f"Unexpected EOF reading {name}") from None


def parse_instances(lines: Iterable[str]) -> list[SBHInstance]:
    """Parse instances from lines of text.

    Each instance is n, k, start oligo, negative errors, repeats flag and
    positive errors on their own lines, then k-mers up to a blank line.
    Blank lines and lines starting with '#' between instances are skipped.
    """
    stream = (line.rstrip("\n") for line in lines)
    instances = []
    for line in stream:
        if not line or line.startswith("#"):
            continue
        n = _to_int(line, "n")
        k = _to_int(_next_line(stream, "k"), "k")
        start_oligo = _next_line(stream, "start_oligo")
        neg_errors = _to_int(_next_line(stream, "neg_errors"), "neg_errors")
        has_repeats = _to_int(_next_line(stream, "has_repeats"), "has_repeats") == 1
        pos_errors = _to_int(_next_line(stream, "pos_errors"), "pos_errors")
        spectrum = list(takewhile(bool, stream))
        instances.append(
            SBHInstance(n, k, start_oligo, neg_errors, has_repeats, pos_errors, spectrum)
        )
    return instances


def read_instances(path: str | os.PathLike[str]) -> list[SBHInstance]:
    """Read all instances from the file at ``path``."""
    with open(path, encoding="utf-8") as handle:
        return parse_instances(handle)


def read_original_sequences(path: str | os.PathLike[str]) -> list[str]:
    """Read one sequence per line, skipping blank lines and '#' comments."""
    with open(path, encoding="utf-8") as handle:
        stripped = (line.rstrip("\n") for line in handle)
        return [line for line in stripped if line and not line.startswith("#")]