import pytest

from app.config import settings

load_secret_from_file = settings._load_secret_from_file


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("KC_URL", "KC_REALM", "KC_DEV_USER", "KC_DEV_PASSWORD", "DISCOURSE_URL", "REQUEST_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(settings, "_load_secret_from_file", lambda name, env_var=None: settings.os.getenv(env_var) or None)


def test_defaults():
    cfg = settings.load_settings()

    assert cfg.keycloak_url == "http://localhost:8180"
    assert cfg.keycloak_realm == "master"
    assert cfg.discourse_url == "https://keycloak.discourse.group"
    assert cfg.request_timeout == 5
    assert cfg.log_level == "INFO"
    assert cfg.dev_credentials_configured is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("KC_URL", "https://kc.example.com/")
    monkeypatch.setenv("KC_REALM", "ops")
    monkeypatch.setenv("REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = settings.load_settings()

    assert cfg.keycloak_url == "https://kc.example.com"
    assert cfg.keycloak_realm == "ops"
    assert cfg.request_timeout == 2.5
    assert cfg.log_level == "DEBUG"


def test_dev_credentials_need_user_and_password(monkeypatch):
    monkeypatch.setenv("KC_DEV_USER", "admin")
    assert settings.load_settings().dev_credentials_configured is False

    monkeypatch.setenv("KC_DEV_PASSWORD", "admin")
    cfg = settings.load_settings()
    assert cfg.dev_credentials_configured is True
    assert cfg.dev_password == "admin"


@pytest.mark.parametrize("raw", ["soon", "0", "-1"])
def test_invalid_timeout_is_rejected(monkeypatch, raw):
    monkeypatch.setenv("REQUEST_TIMEOUT", raw)

    with pytest.raises(RuntimeError, match="REQUEST_TIMEOUT"):
        settings.load_settings()


def test_secret_file_wins_over_environment(monkeypatch, tmp_path):
    (tmp_path / "kc_dev_password").write_text("from-file\n")
    monkeypatch.setenv("KC_DEV_PASSWORD", "from-env")

    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)

    assert load_secret_from_file("kc_dev_password", "KC_DEV_PASSWORD") == "from-file"


def test_missing_secret_file_falls_back_to_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("KC_DEV_PASSWORD", "from-env")
    monkeypatch.setattr(settings, "Path", lambda target: tmp_path if str(target) == "/run/secrets" else target)

    assert load_secret_from_file("kc_dev_password", "KC_DEV_PASSWORD") == "from-env"
