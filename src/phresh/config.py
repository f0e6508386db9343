from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .cart import DEFAULT_DELIVERY_CHARGE
from .formatting import DEFAULT_CURRENCY_SYMBOL, DEFAULT_GROUPING, GROUPINGS
from .numeric import Number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    digit_grouping: str = DEFAULT_GROUPING
    default_delivery_charge: Number = DEFAULT_DELIVERY_CHARGE
    free_delivery_threshold: Optional[Number] = None

    @property
    def label_options(self) -> Dict[str, str]:
        return {"currency_symbol": self.currency_symbol, "grouping": self.digit_grouping}


_ENV_PREFIX = "PHRESH_"


def _find_pyproject(start_dir: Path) -> Path | None:
    for directory in (start_dir, *start_dir.parents):
        candidate = directory / "pyproject.toml"
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> Dict[str, Any]:
    try:
        import tomllib  # py311+
    except ModuleNotFoundError:
        import tomli as tomllib

    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring unreadable %s: %s", path, exc)
        return {}


def _to_number(value: Any, default: Number) -> Number:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return default
    if not math.isfinite(number):
        return default
    return number


def _to_optional_number(value: Any) -> Optional[Number]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    number = _to_number(value, math.nan)
    return None if math.isnan(number) else number


def _to_grouping(value: Any) -> str:
    grouping = str(value).strip().lower()
    if grouping not in GROUPINGS:
        logger.warning("Unknown digit_grouping %r, using %r", value, DEFAULT_GROUPING)
        return DEFAULT_GROUPING
    return grouping


def _from_sources(raw: Dict[str, Any]) -> Config:
    currency_symbol = os.getenv(f"{_ENV_PREFIX}CURRENCY_SYMBOL", raw.get("currency_symbol", DEFAULT_CURRENCY_SYMBOL))
    digit_grouping = _to_grouping(os.getenv(f"{_ENV_PREFIX}DIGIT_GROUPING", raw.get("digit_grouping", DEFAULT_GROUPING)))
    default_delivery_charge = _to_number(
        os.getenv(f"{_ENV_PREFIX}DEFAULT_DELIVERY_CHARGE", raw.get("default_delivery_charge", DEFAULT_DELIVERY_CHARGE)),
        DEFAULT_DELIVERY_CHARGE,
    )
    free_delivery_threshold = _to_optional_number(
        os.getenv(f"{_ENV_PREFIX}FREE_DELIVERY_THRESHOLD", raw.get("free_delivery_threshold"))
    )

    return Config(
        currency_symbol=str(currency_symbol),
        digit_grouping=digit_grouping,
        default_delivery_charge=max(0, default_delivery_charge),
        free_delivery_threshold=free_delivery_threshold,
    )


@lru_cache(maxsize=32)
def load_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    root = Path(start_dir or os.getcwd()).resolve()
    pyproject = _find_pyproject(root)
    if pyproject is None:
        return _from_sources({})

    parsed = _load_toml(pyproject)
    tool = parsed.get("tool", {}) if isinstance(parsed, dict) else {}
    phresh = tool.get("phresh", {}) if isinstance(tool, dict) else {}
    return _from_sources(phresh if isinstance(phresh, dict) else {})


def refresh_config(start_dir: str | os.PathLike[str] | None = None) -> Config:
    load_config.cache_clear()
    return load_config(start_dir)
