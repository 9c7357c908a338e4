"""Pytest overall configuration file for fixtures"""

import pytest
from hashdir.dirrepository import DirRepository


@pytest.fixture(name="props")
def init_props(tmp_path):
    """Properties to initialize a DirRepository."""
    directory = tmp_path / "hashdir"
    # Note, objects generated via tests are placed in a temporary folder
    properties = {
        "store_path": directory.as_posix(),
        "store_algorithm": "sha256",
    }
    return properties


@pytest.fixture(name="store")
def init_store(props):
    """Create DirRepository instance for all tests."""
    store = DirRepository(props)
    return store


@pytest.fixture(name="contents")
def init_contents():
    """Shared test harness data, content and its known hex digests."""
    test_contents = {
        "hello": {
            "data": b"hello",
            "sha1": "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d",
            "sha256": "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824",
        },
        "hello world": {
            "data": b"hello world",
            "sha1": "2aae6c35c94fcfb415dbe95f408b9ce91ee846ed",
            "sha256": "b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9",
        },
        "empty": {
            "data": b"",
            "sha1": "da39a3ee5e6b4b0d3255bfef95601890afd80709",
            "sha256": "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855",
        },
    }
    return test_contents
