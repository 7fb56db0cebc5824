import sys, os

# Ensure src and the shared test helpers are importable
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
TESTS = os.path.dirname(__file__)
for path in (SRC, TESTS):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

from fruitmatch.config.config_loader import load_config


@pytest.fixture(scope="session")
def default_config():
    return load_config()
