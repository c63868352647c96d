import io
import pytest
from memhier.config import SimConfig
from memhier.frontend.interactive import InteractiveSession
from memhier.runtime.hierarchy import HierarchySimulator


def _session(sim, text):
    return InteractiveSession(sim, stdin=io.StringIO(text), stdout=io.StringIO(), stderr=io.StringIO())


def test_interactive_loads_and_shows_cycles(sim):
    session = _session(sim, "100\n100\ns\nq\n")

    session.run()

    out = session.stdout.getvalue()
    assert "CPU Cache Simulation" in out
    assert "0x100: Retrieved from RAM" in out
    assert "0x100: Retrieved from L1, Frame: 1" in out
    assert "Total # of CPU Cycles: 1112" in out
    assert out.count("Load address: 0x") == 4

def test_interactive_dumps_lines(sim):
    session = _session(sim, "400\nl\nq\n")

    session.run()

    out = session.stdout.getvalue()
    assert "-- L1 --\n0: 4\n" in out
    assert "-- L2 --\n0: 1\n" in out
    assert "-- L3 --\n0: 0\n" in out

def test_interactive_malformed_address_is_recoverable(sim):
    session = _session(sim, "zzz\n0x10\nq\n")

    session.run()

    assert "Error: Memory address must be in hex" in session.stderr.getvalue()
    assert "0x10: Retrieved from RAM" in session.stdout.getvalue()
    assert sim.accesses == 1

def test_interactive_quit_stops_reading(sim):
    session = _session(sim, "q\n100\n")

    session.run()

    assert sim.accesses == 0

def test_interactive_ends_on_eof(sim):
    session = _session(sim, "100")

    session.run()

    assert sim.accesses == 1

def test_interactive_reports_out_of_range_address():
    sim = HierarchySimulator(SimConfig(address_bits=16))
    session = _session(sim, "10000\nq\n")

    session.run()

    assert "outside the 16-bit address space" in session.stderr.getvalue()
    assert sim.accesses == 0

@pytest.mark.parametrize("token, keeps_going", [("s", True), ("l", True), ("q", False), ("bad", True)])
def test_handle_return_value(sim, token, keeps_going):
    assert _session(sim, "").handle(token) is keeps_going

def test_interactive_reads_only_first_token_per_line(sim):
    session = _session(sim, "100 200\ns 300\nq\n")

    session.run()

    out = session.stdout.getvalue()
    assert sim.accesses == 1
    assert "0x200" not in out
    assert "0x300" not in out
    assert "Total # of CPU Cycles: 1111" in out
