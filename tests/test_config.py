import pytest
from pydantic import ValidationError

from ayusetu.config import PRODUCTION_URL, SANDBOX_URL, AyuSetuConfig
from ayusetu.utils.config_loader import load_config


def test_base_url_follows_environment():
    assert AyuSetuConfig().base_url == SANDBOX_URL
    assert AyuSetuConfig(environment="production").base_url == PRODUCTION_URL


def test_defaults_are_developer_mode_with_dev_fixtures():
    config = AyuSetuConfig()
    assert config.developer_mode is True
    assert config.dev_mobile == "9876543210"
    assert config.dev_abha_number == "12-3456-7890-1234"
    assert config.mock_delay_scale == 1.0


def test_unknown_environment_is_rejected():
    with pytest.raises(ValidationError):
        AyuSetuConfig(environment="staging")


def test_from_env_reads_variables(monkeypatch, tmp_path):
    monkeypatch.setenv("AYUSETU_DEVELOPER_MODE", "false")
    monkeypatch.setenv("ABDM_ENVIRONMENT", "Production")
    monkeypatch.setenv("ABDM_CLIENT_ID", "client-abc")
    monkeypatch.setenv("ABDM_CLIENT_SECRET", "secret-xyz")
    monkeypatch.setenv("AYUSETU_MOCK_DELAY_SCALE", "0")

    config = AyuSetuConfig.from_env(dotenv_path=str(tmp_path / "missing.env"))

    assert config.developer_mode is False
    assert config.environment == "production"
    assert config.client_id == "client-abc"
    assert config.client_secret == "secret-xyz"
    assert config.mock_delay_scale == 0.0
    assert config.base_url == PRODUCTION_URL


def test_from_env_overrides_win(monkeypatch, tmp_path):
    monkeypatch.setenv("AYUSETU_DEVELOPER_MODE", "false")

    config = AyuSetuConfig.from_env(dotenv_path=str(tmp_path / "missing.env"), developer_mode=True)

    assert config.developer_mode is True


def test_load_config_reads_nested_yaml(tmp_path):
    path = tmp_path / "ayusetu.yaml"
    path.write_text(
        "ayusetu:\n"
        "  developer_mode: false\n"
        "  environment: production\n"
        "  client_id: from-yaml\n"
        "  timeout_seconds: 12\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.developer_mode is False
    assert config.client_id == "from-yaml"
    assert config.timeout_seconds == 12
    assert config.base_url == PRODUCTION_URL


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_invalid_values(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("mock_delay_scale: -1\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(path)


def test_bundled_config_file_loads():
    config = load_config()
    assert config.developer_mode is True
    assert config.environment == "sandbox"
