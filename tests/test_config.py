import yaml
import argparse
import pytest
from pathlib import Path
from memhier.config import SimConfig, LevelConfig

def test_config_defaults_match_reference_table():
    """Tests the default L1/L2/L3/RAM parameters."""
    config = SimConfig()

    assert [(l.name, l.line_size_bytes, l.capacity, l.latency_cycles) for l in config.levels] == [
        ("L1", 256, 4, 1),
        ("L2", 1024, 64, 10),
        ("L3", 4096, 256, 100),
    ]
    assert config.ram_latency_cycles == 1000
    assert config.max_address == 0xFFFF_FFFF
    assert config.replacement_policy == "oldest-age"

def test_config_yaml_loading(tmp_path: Path):
    """Tests that config is loaded correctly from a YAML file."""
    yaml_content = {
        'ram_latency_cycles': 500,
        'replacement_policy': 'lru',
        'levels': [
            {'name': 'L1', 'line_size_bytes': 64, 'capacity': 8, 'latency_cycles': 2},
            {'name': 'L2', 'line_size_bytes': 512, 'capacity': 32, 'latency_cycles': 20},
        ],
    }
    yaml_file = tmp_path / "test.yaml"
    with open(yaml_file, 'w') as f:
        yaml.dump(yaml_content, f)

    # Simulate args parsed from CLI, where only config and trace are provided
    args = argparse.Namespace(config=str(yaml_file), trace="trace.txt", ram_latency_cycles=None,
                              replacement_policy=None)

    config = SimConfig.from_args(args)

    assert config.ram_latency_cycles == 500
    assert config.replacement_policy == 'lru'
    assert config.trace == "trace.txt"
    assert [l.name for l in config.levels] == ["L1", "L2"]
    assert isinstance(config.levels[1], LevelConfig)
    assert config.level("L2").capacity == 32

def test_config_cli_override(tmp_path: Path):
    """Tests that CLI arguments override YAML settings."""
    yaml_file = tmp_path / "test.yaml"
    with open(yaml_file, 'w') as f:
        yaml.dump({'ram_latency_cycles': 500, 'replacement_policy': 'fifo'}, f)

    args = argparse.Namespace(
        config=str(yaml_file),
        trace="trace.txt",
        ram_latency_cycles=2000,  # Override
        replacement_policy=None,
    )

    config = SimConfig.from_args(args)

    assert config.ram_latency_cycles == 2000      # Overridden value
    assert config.replacement_policy == 'fifo'   # Value from YAML

def test_config_missing_yaml_file(tmp_path: Path):
    args = argparse.Namespace(config=str(tmp_path / "nope.yaml"))
    with pytest.raises(ValueError, match="not found"):
        SimConfig.from_args(args)

@pytest.mark.parametrize("kwargs, message", [
    ({"line_size_bytes": 0}, "line size"),
    ({"capacity": 0}, "capacity"),
    ({"latency_cycles": -1}, "latency"),
    ({"name": ""}, "name"),
])
def test_level_config_validation(kwargs, message):
    with pytest.raises(ValueError, match=message):
        LevelConfig(**kwargs)

def test_config_rejects_duplicate_level_names():
    with pytest.raises(ValueError, match="unique"):
        SimConfig(levels=[LevelConfig("L1"), LevelConfig("L1")])

def test_config_rejects_empty_hierarchy():
    with pytest.raises(ValueError, match="At least one"):
        SimConfig(levels=[])

def test_config_rejects_unknown_level_keys():
    with pytest.raises(ValueError, match="Unknown cache level keys"):
        SimConfig(levels=[{"name": "L1", "sets": 2}])

def test_config_to_dict_is_plain_data():
    d = SimConfig().to_dict()
    assert d["levels"][0] == {"name": "L1", "line_size_bytes": 256, "capacity": 4, "latency_cycles": 1}
    assert d["ram_latency_cycles"] == 1000

@pytest.mark.parametrize("kwargs", [
    {"capacity": "4"},
    {"capacity": 2.5},
    {"line_size_bytes": 2.5},
    {"line_size_bytes": True},
    {"latency_cycles": "1"},
    {"name": 3},
])
def test_level_config_rejects_non_integer_values(kwargs):
    with pytest.raises(ValueError):
        LevelConfig(**kwargs)

def test_level_config_rejects_reserved_ram_name():
    with pytest.raises(ValueError, match="reserved"):
        LevelConfig(name="RAM")

@pytest.mark.parametrize("kwargs", [
    {"ram_latency_cycles": "slow"},
    {"ram_latency_cycles": 10.0},
    {"address_bits": "32"},
    {"policy_seed": 1.5},
    {"levels": 3},
    {"levels": ["L1"]},
])
def test_sim_config_rejects_malformed_values(kwargs):
    with pytest.raises(ValueError):
        SimConfig(**kwargs)

@pytest.mark.parametrize("yaml_content", [
    {"ram_latency_cycles": "slow"},
    {"levels": [{"name": "L1", "line_size_bytes": 256, "capacity": "4", "latency_cycles": 1}]},
    {"levels": [{"name": "L1", "line_size_bytes": 2.5, "capacity": 4, "latency_cycles": 1}]},
    {"levels": [{"name": "RAM", "line_size_bytes": 256, "capacity": 4, "latency_cycles": 1}]},
])
def test_config_yaml_bad_values_raise_value_error(tmp_path: Path, yaml_content):
    yaml_file = tmp_path / "bad.yaml"
    yaml_file.write_text(yaml.dump(yaml_content))

    with pytest.raises(ValueError):
        SimConfig.from_args(argparse.Namespace(config=str(yaml_file)))

@pytest.mark.parametrize("key", ["level", "max_address", "to_dict", "bogus"])
def test_config_yaml_rejects_non_field_keys(tmp_path: Path, key):
    """Only dataclass fields can be set from YAML; methods and properties stay intact."""
    yaml_file = tmp_path / "bad.yaml"
    yaml_file.write_text(yaml.dump({key: 5}))

    with pytest.raises(ValueError, match="Unknown config keys"):
        SimConfig.from_args(argparse.Namespace(config=str(yaml_file)))

def test_config_cli_ignores_non_field_args():
    args = argparse.Namespace(config=None, level=3, func=print, cmd="run", ram_latency_cycles=7)

    config = SimConfig.from_args(args)

    assert config.ram_latency_cycles == 7
    assert config.level("L1").capacity == 4
