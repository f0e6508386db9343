import json

import pytest

from phresh.config import refresh_config


@pytest.fixture(autouse=True)
def clear_phresh_env(monkeypatch, tmp_path):
    for key in [
        "PHRESH_CURRENCY_SYMBOL",
        "PHRESH_DIGIT_GROUPING",
        "PHRESH_DEFAULT_DELIVERY_CHARGE",
        "PHRESH_FREE_DELIVERY_THRESHOLD",
    ]:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    refresh_config()


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write
