"""Tests for settings path resolution."""

from pathlib import Path

from reviewdesk.core.config import PACKAGE_DATA_DIR, Settings


def test_default_paths(monkeypatch):
    monkeypatch.delenv("APPROVALS_FILE", raising=False)
    monkeypatch.delenv("MOCK_FILE", raising=False)
    config = Settings(_env_file=None, data_dir="var/reviews")

    assert config.approvals_path == Path("var/reviews") / "approvals.json"
    assert config.mock_path == PACKAGE_DATA_DIR / "mock_hostaway_reviews.json"
    assert config.mock_path.exists()


def test_explicit_paths_win():
    config = Settings(_env_file=None, approvals_file="/tmp/a.json", mock_file="/tmp/m.json")

    assert config.approvals_path == Path("/tmp/a.json")
    assert config.mock_path == Path("/tmp/m.json")
