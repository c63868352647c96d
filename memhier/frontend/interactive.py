from __future__ import annotations
import sys
from typing import Optional, TextIO

from ..runtime.hierarchy import HierarchySimulator
from ..utils import reporting
from .trace import AddressFormatError, parse_address

PROMPT = "Load address: 0x"
HELP_TEXT = (
    "CPU Cache Simulation\n"
    " - CPU only supports a single instruction: load address\n"
    " - Memory addresses limited to 32 bit\n"
    " - Enter 's' to show the total number of CPU cycles\n"
    " - Enter 'l' to display all occupied cache lines\n"
    " - Enter 'q' to exit\n"
)

SHOW_CYCLES = "s"
SHOW_LINES = "l"
QUIT = "q"


class InteractiveSession:
    """
    Line-oriented prompt that feeds typed addresses into a simulator.

    Each input line is one command: only its first whitespace-separated
    token is read and the rest of the line is discarded, whether that token
    is an address or one of the `s`/`l`/`q` control letters.
    """
    def __init__(self, simulator: HierarchySimulator,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None):
        self.simulator = simulator
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

    def _out(self, text: str = ""):
        print(text, file=self.stdout)

    def handle(self, token: str) -> bool:
        """Handles one input token. Returns False when the session should end."""
        token = token.strip()
        if token == QUIT:
            return False
        if token == SHOW_CYCLES:
            self._out(reporting.format_total_cycles(self.simulator.cumulative_cycles))
            self._out()
            return True
        if token == SHOW_LINES:
            self._out(reporting.format_cache_lines(self.simulator))
            return True

        try:
            result = self.simulator.access(parse_address(token))
        except AddressFormatError:
            print("Error: Memory address must be in hex", file=self.stderr)
            self._out()
            return True
        except ValueError as e:
            # Out of range for a narrower configured address width
            print(f"Error: {e}", file=self.stderr)
            self._out()
            return True

        self._out(reporting.format_access(result))
        self._out()
        return True

    def run(self):
        self._out(HELP_TEXT)
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                # EOF
                self._out()
                return
            tokens = line.split()
            if not tokens:
                continue
            if not self.handle(tokens[0]):
                return
