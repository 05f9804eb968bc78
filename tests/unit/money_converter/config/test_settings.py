import json
import os

import pytest

from money_converter.config import settings
from money_converter.config.settings import CURRENCY_CONFIG_ENV_VAR, get_default_registry, load_registry
from money_converter.conversion.converter import MoneyConverter
from money_converter.domain.monetary.currency_registry import DEFAULT_CURRENCY_REGISTRY


@pytest.fixture(autouse=True)
def clear_default_registry_cache():
    get_default_registry.cache_clear()
    yield
    get_default_registry.cache_clear()


@pytest.fixture
def no_dotenv(monkeypatch):
    """Keep a developer's `.env` file out of the tests."""
    monkeypatch.setattr(settings, "load_dotenv", lambda *args, **kwargs: False)


def test_default_registry_without_configuration(monkeypatch, no_dotenv):
    monkeypatch.delenv(CURRENCY_CONFIG_ENV_VAR, raising=False)

    assert get_default_registry() is DEFAULT_CURRENCY_REGISTRY
    assert MoneyConverter.default().registry is DEFAULT_CURRENCY_REGISTRY


def test_default_registry_from_environment(monkeypatch, no_dotenv, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"XTS": {"precision": 3, "units": {"XTS": {"shift": 0}}}}), encoding="utf-8")
    monkeypatch.setenv(CURRENCY_CONFIG_ENV_VAR, str(path))

    registry = get_default_registry()

    assert list(registry) == ["XTS"]
    assert get_default_registry() is registry


def test_default_registry_from_dotenv_file(monkeypatch, tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"XTS": {"precision": 3, "units": {"XTS": {"shift": 0}}}}), encoding="utf-8")
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text(f"{CURRENCY_CONFIG_ENV_VAR}={config_path}\n", encoding="utf-8")
    monkeypatch.delenv(CURRENCY_CONFIG_ENV_VAR, raising=False)

    real_load_dotenv = settings.load_dotenv
    monkeypatch.setattr(settings, "load_dotenv", lambda: real_load_dotenv(dotenv_path))

    try:
        assert list(get_default_registry()) == ["XTS"]
    finally:
        os.environ.pop(CURRENCY_CONFIG_ENV_VAR, None)


def test_load_registry_rejects_unknown_extension(tmp_path):
    with pytest.raises(ValueError, match="unsupported extension"):
        load_registry(tmp_path / "config.yaml")
