import pytest
from memhier.config import SimConfig, LevelConfig
from memhier.runtime.hierarchy import HierarchySimulator


@pytest.fixture
def config():
    """Default L1/L2/L3/RAM configuration."""
    return SimConfig()


@pytest.fixture
def sim(config):
    """A freshly constructed simulator with every line empty."""
    return HierarchySimulator(config)


@pytest.fixture
def small_config():
    """Two small levels, handy for driving evictions by hand."""
    return SimConfig(levels=[
        LevelConfig("L1", line_size_bytes=16, capacity=2, latency_cycles=1),
        LevelConfig("L2", line_size_bytes=64, capacity=4, latency_cycles=10),
    ], ram_latency_cycles=100)
