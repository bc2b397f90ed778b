"""Tests for the bundles and rooms commands."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from bundlevalley.cli import cli


@pytest.mark.usefixtures("_isolated_data_dir")
class TestBundles:
    def test_json_lists_all(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "bundles"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 30
        rooms = [b["room"] for b in data["bundles"]]
        assert rooms == sorted(rooms)

    def test_room_filter(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "bundles", "--room", "Fish Tank"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 6
        assert all(b["room"] == "Fish Tank" for b in data["bundles"])

    def test_unknown_room_exits_1(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "bundles", "--room", "Attic"])
        assert result.exit_code == 1
        assert json.loads(result.stderr)["error"]["code"] == "NOT_FOUND"

    def test_quiet_prints_ids(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "bundles", "--room", "Vault"])
        assert result.exit_code == 0
        assert len(result.stdout.split()) == 4
        assert "vault_2500" in result.stdout.split()

    def test_human_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["bundles", "--room", "Pantry"])
        assert result.exit_code == 0
        assert "Spring Crops Bundle" in result.stdout
        assert "6 bundles" in result.stdout


@pytest.mark.usefixtures("_isolated_data_dir")
class TestRooms:
    def test_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "rooms"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["count"] == 6
        assert set(data["rooms"]) == {
            "Pantry",
            "Crafts Room",
            "Fish Tank",
            "Boiler Room",
            "Bulletin Board",
            "Vault",
        }

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "rooms"])
        assert result.exit_code == 0
        assert "Boiler Room" in result.stdout.splitlines()
