from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from process_validator.schemas import process_config_schema


@pytest.fixture
def valid_config() -> dict[str, Any]:
    return {
        "name": "alpha-service",
        "port": 8080,
        "retries": 3,
        "tags": ["alpha", "beta"],
        "healthCheck": {"interval": 30, "timeout": 5, "strategy": "http"},
    }


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "process.schema.json"
    path.write_text(json.dumps(process_config_schema()), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's own settings file or env var out of the tests.
    monkeypatch.delenv("PROCESS_VALIDATOR_SETTINGS", raising=False)
    monkeypatch.chdir(tmp_path)
