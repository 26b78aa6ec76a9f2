"""Shared pytest fixtures for the test suite."""

import json

import pytest

import claude_dashboard.usage_client as usage_client


def write_transcript(path, records):
    """Write a list of records (dicts, or raw strings for bad lines) as JSONL."""
    with open(path, "w", encoding="utf-8") as f:
        for record in records:
            line = record if isinstance(record, str) else json.dumps(record)
            f.write(line + "\n")
    return str(path)


@pytest.fixture
def make_transcript(tmp_path):
    """Fixture that returns a helper to write transcript.jsonl files."""

    def _make(records, name="transcript.jsonl"):
        return write_transcript(tmp_path / name, records)

    return _make


@pytest.fixture(autouse=True)
def isolated_usage_cache(tmp_path, monkeypatch):
    """Point the shared usage cache at a temp file and clear the memory tier."""
    cache_file = tmp_path / "usage-cache.json"
    monkeypatch.setattr(usage_client, "USAGE_CACHE_FILE", str(cache_file))
    usage_client._usage_cache.data = None
    usage_client._usage_cache.timestamp = 0.0
    yield cache_file
    usage_client._usage_cache.data = None
    usage_client._usage_cache.timestamp = 0.0
