from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from money_converter.config.registry_loader import load_registry_csv, load_registry_json
from money_converter.domain.monetary.currency_registry import DEFAULT_CURRENCY_REGISTRY, CurrencyRegistry

logger = logging.getLogger(__name__)

# Environment variable (or `.env` entry) with the path of a currency config file (.json or .csv)
CURRENCY_CONFIG_ENV_VAR = "MONEY_CURRENCY_CONFIG"


def load_registry(path: str | Path) -> CurrencyRegistry:
    """Load a registry from a `.json` or `.csv` currency config file.

    Raises:
        ValueError: If the file extension is not supported or the content is invalid.
        FileNotFoundError: If $path does not exist.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_registry_json(path)
    if suffix == ".csv":
        return load_registry_csv(path)
    raise ValueError(f"Cannot call `load_registry` because $path ('{path}') has unsupported extension '{suffix}'. Expected .json or .csv")


def configured_registry_path() -> Path | None:
    """Path from `MONEY_CURRENCY_CONFIG` (environment or `.env` file), or None if unset."""
    load_dotenv()
    value = os.environ.get(CURRENCY_CONFIG_ENV_VAR, "").strip()
    return Path(value) if value else None


@lru_cache(maxsize=1)
def get_default_registry() -> CurrencyRegistry:
    """Registry used by `MoneyConverter.default()`.

    Loaded once per process from the file named by `MONEY_CURRENCY_CONFIG`; falls back to the
    predefined `DEFAULT_CURRENCY_REGISTRY` when the variable is unset.
    Call `get_default_registry.cache_clear()` to re-read the configuration.
    """
    path = configured_registry_path()
    if path is None:
        logger.debug(f"${CURRENCY_CONFIG_ENV_VAR} is not set; using predefined currencies")
        return DEFAULT_CURRENCY_REGISTRY

    logger.info(f"Loading currency config from ${CURRENCY_CONFIG_ENV_VAR} = '{path}'")
    return load_registry(path)
