from __future__ import annotations
import json
from pathlib import Path
from typing import List, Dict, Any
from ..config import SimConfig
from ..runtime.hierarchy import AccessResult, HierarchySimulator, RAM
from . import viz

def _calculate_percentiles(data: List[float]) -> Dict[str, float]:
    """Summarizes per-access latencies: min, max, p50/p95/p99 (nearest rank) and mean."""
    if not data:
        return {}
    data = sorted(data)
    n = len(data)
    return {
        "min": data[0],
        "max": data[-1],
        "p50": data[int(n * 0.5)],
        "p95": data[int(n * 0.95)],
        "p99": data[int(n * 0.99)],
        "avg": sum(data) / n
    }

def format_summary(config: SimConfig) -> str:
    """Table of the configured levels, one set each."""
    rule = "-" * 46
    rows = [("", "Line Size", "Sets", "Lines/Set", "Latency")]
    for lvl in config.levels:
        rows.append((lvl.name, str(lvl.line_size_bytes), "1", str(lvl.capacity), str(lvl.latency_cycles)))
    rows.append(("Memory", "N/A", "N/A", "N/A", str(config.ram_latency_cycles)))
    body = "\n".join(f"{a:<7} {b:<10} {c:<5} {d:<10} {e:<8}".rstrip() for a, b, c, d, e in rows)
    return f"{rule}\n{body}\n{rule}\n"

def format_access(result: AccessResult) -> str:
    if result.served_by == RAM:
        return f"{result.address:#x}: Retrieved from RAM"
    return f"{result.address:#x}: Retrieved from {result.served_by}, Frame: {result.frame}"

def format_cache_lines(simulator: HierarchySimulator) -> str:
    """Occupied `slot: frame` pairs of every level."""
    out = "\n"
    for name, lines in simulator.snapshot().items():
        out += f"-- {name} --\n"
        for index, frame, _age in lines:
            out += f"{index}: {frame}\n"
        out += "\n"
    return out

def format_total_cycles(cycles: int) -> str:
    return f"Total # of CPU Cycles: {cycles}"

def generate_report_json(results: List[AccessResult], simulator: HierarchySimulator,
                         config: SimConfig) -> Dict[str, Any]:
    """Generates a JSON-compatible dictionary from a finished run."""
    stats = simulator.get_stats()
    served_counts = {lvl.name: 0 for lvl in simulator.levels}
    served_counts[RAM] = 0
    timeline = []
    for i, r in enumerate(results):
        served_counts[r.served_by] += 1
        item = r.to_json()
        item["index"] = i
        timeline.append(item)

    report_data = {
        "total_cycles": stats["total_cycles"],
        "accesses": stats["accesses"],
        "ram_accesses": stats["ram_accesses"],
        "served_by": served_counts,
        "level_stats": stats["levels"],
        "latency_stats": _calculate_percentiles([r.latency for r in results]),
        "timeline": timeline,
        "occupancy": {name: [{"slot": s, "frame": f, "age": a} for s, f, a in lines]
                      for name, lines in simulator.snapshot().items()},
        "config": config.to_dict(),
    }
    return report_data

def generate_report(results: List[AccessResult], simulator: HierarchySimulator, config: SimConfig):
    """Generates all report artifacts."""
    report_data = generate_report_json(results, simulator, config)
    output_dir = Path(config.report_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(output_dir / "report.json", "w") as f:
        json.dump(report_data, f, indent=4)

    viz.export_latency_chart(report_data['timeline'], str(output_dir / "report.html"))
    print(viz.export_served_ascii(report_data['served_by']))

    print(f"\nReports generated in {output_dir.absolute()}")

    if report_data.get('latency_stats'):
        print("\nAccess Latency Stats (cycles):")
        for key, value in report_data['latency_stats'].items():
            print(f"  {key:<5}: {value:.2f}")
    print("\nHit Rates:")
    for name, lvl_stats in report_data['level_stats'].items():
        print(f"  {name}: {lvl_stats['hit_rate']:.2%} ({lvl_stats['evictions']} evictions)")
    print(f"\nTotal Cycles: {report_data['total_cycles']}")
