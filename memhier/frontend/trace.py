from __future__ import annotations
import re
from typing import Callable, Iterable, Iterator, List, Optional

from ..runtime.hierarchy import AccessResult, HierarchySimulator

MAX_HEX_DIGITS = 8
_HEX_TOKEN = re.compile(r"(?:0[xX])?([0-9a-fA-F]{1,%d})" % MAX_HEX_DIGITS)


class AddressFormatError(ValueError):
    """Raised for an input token that is not a hexadecimal load address."""


def parse_address(token: str) -> int:
    """Parses an optionally 0x-prefixed token of up to 8 hex digits."""
    m = _HEX_TOKEN.fullmatch(token.strip())
    if m is None:
        raise AddressFormatError(f"Memory address must be in hex, got {token.strip()!r}")
    return int(m.group(1), 16)


def parse_addresses(lines: Iterable[str], source: str = "<input>") -> Iterator[int]:
    """Yields one address per non-blank line."""
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_address(line)
        except AddressFormatError as e:
            raise AddressFormatError(f"{source}:{lineno}: {e}") from None


def read_trace(path: str) -> Iterator[int]:
    """Yields the addresses of a newline-separated trace file."""
    with open(path, 'r') as f:
        yield from parse_addresses(f, source=path)


def run_trace(simulator: HierarchySimulator, addresses: Iterable[int],
              on_access: Optional[Callable[[AccessResult], None]] = None) -> List[AccessResult]:
    """Feeds every address through the simulator in order."""
    results = []
    for address in addresses:
        result = simulator.access(address)
        if on_access is not None:
            on_access(result)
        results.append(result)
    return results
