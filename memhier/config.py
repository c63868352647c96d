from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import List
import yaml
from pathlib import Path

RAM_NAME = "RAM"  # label of the backing store, not usable for a cache level

def _check_int(value, what: str):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")

@dataclass
class LevelConfig:
    """Static parameters of one fully-associative cache level."""
    name: str = "L1"
    line_size_bytes: int = 256
    capacity: int = 4  # lines (ways) in the single set
    latency_cycles: int = 1

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError(f"Cache level name must be a non-empty string, got {self.name!r}")
        if self.name == RAM_NAME:
            raise ValueError(f"Cache level name {RAM_NAME!r} is reserved for main memory.")
        _check_int(self.line_size_bytes, f"{self.name}: line size")
        _check_int(self.capacity, f"{self.name}: capacity")
        _check_int(self.latency_cycles, f"{self.name}: latency")
        if not self.line_size_bytes > 0:
            raise ValueError(f"{self.name}: line size must be positive.")
        if not self.capacity > 0:
            raise ValueError(f"{self.name}: capacity must be positive.")
        if self.latency_cycles < 0:
            raise ValueError(f"{self.name}: latency must not be negative.")

    @classmethod
    def from_dict(cls, data: dict) -> LevelConfig:
        unknown = set(data) - {"name", "line_size_bytes", "capacity", "latency_cycles"}
        if unknown:
            raise ValueError(f"Unknown cache level keys: {sorted(unknown)}")
        return cls(**data)


def default_levels() -> List[LevelConfig]:
    return [
        LevelConfig("L1", line_size_bytes=256, capacity=4, latency_cycles=1),
        LevelConfig("L2", line_size_bytes=1024, capacity=64, latency_cycles=10),
        LevelConfig("L3", line_size_bytes=4096, capacity=256, latency_cycles=100),
    ]


@dataclass
class SimConfig:
    """Memory hierarchy simulator configuration."""
    # Input
    trace: str = ""  # empty means interactive mode
    config_file: str = ""

    # Hierarchy, probed in list order
    levels: List[LevelConfig] = field(default_factory=default_levels)
    ram_latency_cycles: int = 1000
    address_bits: int = 32

    # Replacement
    replacement_policy: str = "oldest-age"  # oldest-age, lru, fifo, random
    policy_seed: int = 0

    # Output
    show_lines: bool = False
    report_dir: str = ""
    verbose: bool = False

    def __post_init__(self):
        if not isinstance(self.levels, list):
            raise ValueError(f"levels must be a list of cache levels, got {self.levels!r}")
        for lvl in self.levels:
            if not isinstance(lvl, (LevelConfig, dict)):
                raise ValueError(f"Each cache level must be a mapping, got {lvl!r}")
        self.levels = [lvl if isinstance(lvl, LevelConfig) else LevelConfig.from_dict(lvl)
                       for lvl in self.levels]
        if not self.levels:
            raise ValueError("At least one cache level is required.")
        names = [lvl.name for lvl in self.levels]
        if len(set(names)) != len(names):
            raise ValueError(f"Cache level names must be unique, got {names}")
        _check_int(self.ram_latency_cycles, "RAM latency")
        _check_int(self.address_bits, "Address width")
        _check_int(self.policy_seed, "Policy seed")
        if self.ram_latency_cycles < 0:
            raise ValueError("RAM latency must not be negative.")
        if not self.address_bits > 0:
            raise ValueError("Address width must be positive.")

    @property
    def max_address(self) -> int:
        return (1 << self.address_bits) - 1

    def level(self, name: str) -> LevelConfig:
        for lvl in self.levels:
            if lvl.name == name:
                return lvl
        raise KeyError(name)

    def update_from_yaml(self, yaml_path: str):
        """Updates config fields from a YAML file."""
        with open(yaml_path, 'r') as f:
            yaml_config = yaml.safe_load(f) or {}
        if not isinstance(yaml_config, dict):
            raise ValueError(f"Config file {yaml_path} must contain a mapping.")
        names = {f.name for f in fields(self)}
        unknown = set(yaml_config) - names
        if unknown:
            raise ValueError(f"Unknown config keys in {yaml_path}: {sorted(unknown)}")
        for key, value in yaml_config.items():
            setattr(self, key, value)
        self.__post_init__()

    def to_dict(self) -> dict:
        d = dict(self.__dict__)
        d["levels"] = [dict(lvl.__dict__) for lvl in self.levels]
        return d

    @classmethod
    def from_args(cls, args) -> SimConfig:
        """Factory method to create a SimConfig from parsed argparse arguments."""
        config = cls()

        # 1. Load from YAML config file if provided
        if hasattr(args, 'config') and args.config:
            config.config_file = args.config
            if not Path(config.config_file).exists():
                raise ValueError(f"Config file {config.config_file} not found.")
            config.update_from_yaml(config.config_file)

        # 2. Override with command-line arguments
        names = {f.name for f in fields(config)} - {"levels"}
        for key, value in vars(args).items():
            if value is not None and key in names:
                setattr(config, key, value)

        config.__post_init__()
        return config
