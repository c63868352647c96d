from __future__ import annotations
import argparse
import sys
from ..config import SimConfig
from ..frontend.interactive import InteractiveSession
from ..frontend.trace import read_trace, run_trace
from ..runtime.hierarchy import HierarchySimulator
from ..runtime.replacement import POLICY_NAMES
from ..utils import reporting
from ..utils.logging import set_verbose


def _setup(args) -> tuple[SimConfig, HierarchySimulator]:
    config = SimConfig.from_args(args)
    set_verbose(bool(config.verbose))
    return config, HierarchySimulator(config)


def cmd_run(args):
    """Handles the 'run' command: batch mode over a trace file."""
    config, sim = _setup(args)

    print(reporting.format_summary(config))
    print(f"Reading from '{config.trace}'...\n")

    results = run_trace(sim, read_trace(config.trace),
                        on_access=lambda r: print(reporting.format_access(r)))

    print()
    print(reporting.format_total_cycles(sim.cumulative_cycles))

    if config.show_lines:
        print(reporting.format_cache_lines(sim), end="")

    if config.report_dir:
        reporting.generate_report(results, sim, config)
    return 0


def cmd_interactive(args):
    """Handles the 'interactive' command."""
    config, sim = _setup(args)

    print(reporting.format_summary(config))
    InteractiveSession(sim).run()
    return 0


def _add_common_args(p):
    p.add_argument("-c", "--config", type=str, default=None,
                   help="Path to YAML config file to override defaults")
    p.add_argument("--policy", type=str, default=None, dest="replacement_policy",
                   choices=POLICY_NAMES, help="Replacement policy for full cache levels")
    p.add_argument("--seed", type=int, default=None, dest="policy_seed",
                   help="Seed for the random replacement policy")
    p.add_argument("--ram-latency", type=int, default=None, dest="ram_latency_cycles",
                   help="RAM access latency in cycles")
    p.add_argument("-v", "--verbose", action="store_true", default=None,
                   help="Log evictions and per-access outcomes")


def build_parser():
    p = argparse.ArgumentParser(
        prog="memhier",
        description="Multi-level fully-associative cache hierarchy simulator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- Run Command ---
    pr = sub.add_parser("run", help="Simulate every address of a trace file",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    pr.add_argument("trace", help="File of newline-separated hex load addresses")
    pr.add_argument("-l", "--lines", action="store_true", default=None, dest="show_lines",
                    help="Display all occupied cache lines after the run")
    pr.add_argument("--report", type=str, default=None, dest="report_dir",
                    help="Directory to save report.json and report.html")
    _add_common_args(pr)
    pr.set_defaults(func=cmd_run)

    # --- Interactive Command ---
    pi = sub.add_parser("interactive", help="Prompt for load addresses",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    _add_common_args(pi)
    pi.set_defaults(func=cmd_interactive)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
