import json

import pytest

from baseline_buddy.config import ConfigLoader


@pytest.fixture
def loader():
    return ConfigLoader()


@pytest.fixture
def write_config(tmp_path):
    """Write a JSON config into tmp_path and return its path."""

    def _write(data, name="baseline.config.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
