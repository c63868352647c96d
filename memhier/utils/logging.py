import logging

PACKAGE_LOGGER = "memhier"

def get_logger(name: str = PACKAGE_LOGGER):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    return logging.getLogger(name)

def set_verbose(verbose: bool):
    """DEBUG shows evictions and every access outcome; INFO is the default."""
    get_logger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
