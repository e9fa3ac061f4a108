from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from designernews.settings import reset_settings_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("DESIGNER_NEWS_ENDPOINT", "https://api.designernews.co/api/v2/")
    monkeypatch.setenv("DESIGNER_NEWS_TIMEOUT_SECONDS", "5")
    monkeypatch.delenv("SMMRY_API_KEY", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()

