"""Shared fixtures for the sshmenu tests."""

import pytest

EXAMPLE_CONFIG = """Host alpha
  Hostname 10.0.0.1
  User ops
Host beta
"""


@pytest.fixture
def write_config(tmp_path):
    def _write(text, name="config"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def example_config(write_config):
    return write_config(EXAMPLE_CONFIG)
