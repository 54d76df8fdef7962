"""Shared fixtures for donegraph tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

SAMPLE_GRAPH = {
    "nodes": [
        {"short_code": "A", "text": "Task A", "description": "desc", "doneness": 0},
        {"short_code": "B", "text": "Task B", "description": "more", "doneness": 100},
    ],
    "dependencies": [
        {"node": "A", "depends_on": ["B"]},
    ],
}


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(SAMPLE_GRAPH), encoding="utf-8")
    return path
