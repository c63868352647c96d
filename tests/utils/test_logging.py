import logging
from memhier.runtime.hierarchy import HierarchySimulator
from memhier.utils.logging import get_logger, set_verbose, PACKAGE_LOGGER


def test_set_verbose_toggles_package_level():
    set_verbose(True)
    assert get_logger().level == logging.DEBUG
    set_verbose(False)
    assert get_logger().level == logging.INFO

def test_evictions_are_logged_at_debug(small_config, caplog):
    sim = HierarchySimulator(small_config)

    with caplog.at_level(logging.DEBUG, logger=PACKAGE_LOGGER):
        for a in (0x00, 0x10, 0x20):
            sim.access(a)

    assert "L1: evicted frame 0 for frame 2" in caplog.text
    assert "0x20: served by L2, latency 11" in caplog.text
