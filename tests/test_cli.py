"""Tests for the chefsito CLI."""

import json

import pytest
from typer.testing import CliRunner

from chefsito.cache.store import JsonFileStore, MemoryStore
from chefsito.main import app

runner = CliRunner()


@pytest.fixture
def store(monkeypatch):
    """Swap the on-disk store for an in-memory one."""
    store = MemoryStore()
    monkeypatch.setattr("chefsito.main._store", lambda: store)
    return store


class TestOfflineCommands:
    """Tests for commands that need no network or store."""

    def test_difficulty(self):
        """difficulty should print the bucket and score."""
        result = runner.invoke(app, ["difficulty", "20", "4", "5"])
        assert result.exit_code == 0
        assert "intermediate (score 42)" in result.output

    def test_parse(self):
        """parse should list each ingredient heard."""
        result = runner.invoke(app, ["parse", "hey cheffy, I've got chicken breast, rice and um broccoli"])
        assert result.exit_code == 0
        assert "- chicken breast" in result.output
        assert "- broccoli" in result.output

    def test_parse_nothing(self):
        """parse should say when nothing was heard."""
        result = runner.invoke(app, ["parse", "um, like"])
        assert result.exit_code == 0
        assert "didn't catch any ingredients" in result.output

    def test_rank(self, tmp_path):
        """rank should put the protein recipe first."""
        candidates = tmp_path / "candidates.json"
        candidates.write_text(
            json.dumps(
                [
                    {"recipe": {"id": 1, "name": "Soup", "match_percentage": 40}, "used_ingredients": ["garlic"]},
                    {"recipe": {"id": 2, "name": "Stew", "match_percentage": 30}, "used_ingredients": ["chicken"]},
                ]
            )
        )

        result = runner.invoke(app, ["rank", str(candidates), "-i", "chicken breast", "-i", "garlic"])

        assert result.exit_code == 0
        assert "Primary protein: chicken" in result.output
        assert result.output.index("Stew") < result.output.index("Soup")

    def test_rank_invalid_file(self, tmp_path):
        """rank should reject a malformed candidates file."""
        candidates = tmp_path / "candidates.json"
        candidates.write_text("[{}]")
        result = runner.invoke(app, ["rank", str(candidates), "-i", "rice"])
        assert result.exit_code == 2


class TestStoreCommands:
    """Tests for commands backed by the local store."""

    def test_units_default_and_set(self, store):
        """units should default to metric and persist a change."""
        assert "Using metric units" in runner.invoke(app, ["units"]).output

        result = runner.invoke(app, ["units", "imperial"])
        assert result.exit_code == 0
        assert store.get("useMetricUnits") is False
        assert "Using imperial units" in runner.invoke(app, ["units"]).output

    def test_units_rejects_unknown(self, store):
        """units should reject unknown systems."""
        assert runner.invoke(app, ["units", "cubits"]).exit_code == 2

    def test_cache_stats_empty(self, store):
        """cache-stats should report an empty cache."""
        result = runner.invoke(app, ["cache-stats"])
        assert result.exit_code == 0
        assert "Cache is empty" in result.output

    def test_cache_stats_corrupt_store(self, tmp_path, monkeypatch):
        """An unreadable store should report an empty cache, not crash."""
        path = tmp_path / "store.json"
        path.write_text("{not json")
        monkeypatch.setattr("chefsito.main._store", lambda: JsonFileStore(path))

        result = runner.invoke(app, ["cache-stats"])

        assert result.exit_code == 0
        assert "Cache is empty" in result.output

    def test_cache_clear(self, store):
        """cache-clear should keep user settings."""
        store.set("cache_popular_recipes", "[]")
        store.set("cache_popular_recipes_timestamp", 0)
        store.set("useMetricUnits", True)

        result = runner.invoke(app, ["cache-clear"])

        assert result.exit_code == 0
        assert "Cleared 2 cache keys" in result.output
        assert store.keys() == {"useMetricUnits"}


class TestHealth:
    """Tests for the health command."""

    def test_health(self):
        """health should report loaded configuration."""
        result = runner.invoke(app, ["health"])
        assert result.exit_code == 0
        assert "Health Check" in result.output
        assert "Configuration loaded" in result.output
