import json
from datetime import datetime, timezone

import pytest

from settings import Settings

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings(tmp_path):
    """Settings pointing every file at a scratch directory"""
    return Settings(
        credentials_file=tmp_path / "credentials.json",
        cache_file=tmp_path / "usage_cache.json",
    )


@pytest.fixture
def write_credentials(settings):
    def _write(token="sk-ant-oat-test"):
        settings.credentials_file.write_text(
            json.dumps({"claudeAiOauth": {"accessToken": token}})
        )
    return _write
