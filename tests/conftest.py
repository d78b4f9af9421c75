import pytest # type: ignore
from cardinal.lib.hyperloglog import HyperLogLog
from cardinal.lib.hashing import xxhash_function

def pytest_configure(config):
    """Add markers to the pytest configuration."""
    config.addinivalue_line("markers", "quick: mark test as quick to run")
    config.addinivalue_line("markers", "full: mark test as part of the full test suite (statistical trials)")
    config.addinivalue_line("markers", "slow: mark test as very slow to run")

@pytest.fixture
def seeded_sketch():
    """Factory for sketches hashed with a seeded xxhash."""
    def _make(precision: int = 10, seed: int = 0, hash_size: int = 32) -> HyperLogLog:
        return HyperLogLog(precision=precision,
                           hash_function=xxhash_function(seed=seed, hash_size=hash_size),
                           hash_size=hash_size)
    return _make
