"""Pytest configuration and fixtures for CLI tests."""

import json

import pytest
import yaml
from click.testing import CliRunner

from itemsearch.cli.main import cli


@pytest.fixture
def cli_runner():
    """Click CLI test runner that always invokes the itemsearch group."""

    class ItemSearchCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            return super().invoke(cli, ["--no-color", *args], **kwargs)

    return ItemSearchCliRunner()


@pytest.fixture
def desserts_file(tmp_path):
    path = tmp_path / "desserts.json"
    path.write_text(json.dumps(["apple pie", "banana split", "apple tart"]))
    return path


@pytest.fixture
def teas_file(tmp_path):
    path = tmp_path / "teas.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "items": [
                    {"id": 1, "name": "Tea", "shelf": "drinks"},
                    {"id": 2, "name": "Teapot", "shelf": "kitchen"},
                    {"id": 3, "name": "Green tea", "shelf": "drinks"},
                ]
            },
            sort_keys=False,
        )
    )
    return path
