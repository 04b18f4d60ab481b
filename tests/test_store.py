import pytest

from chat_client.models import DEFAULT_BACKEND_URLS, DEFAULT_FEATURES, Environment
from chat_client.store import ChatConfig, config


@pytest.mark.parametrize("environment", ["development", "staging", "production"])
def test_backend_url_matches_table_entry(environment: str) -> None:
    cfg = ChatConfig(ENVIRONMENT=environment)
    assert cfg.get_backend_url() == DEFAULT_BACKEND_URLS[environment]


def test_unknown_environment_falls_back_to_production() -> None:
    cfg = ChatConfig(ENVIRONMENT="qa")
    assert cfg.get_backend_url() == "https://realtimechattt.netlify.app/.netlify/functions"


def test_empty_url_entry_falls_back_to_production() -> None:
    cfg = ChatConfig()
    cfg.BACKEND_URLS["development"] = ""
    assert cfg.get_backend_url() == DEFAULT_BACKEND_URLS["production"]


def test_missing_production_entry_returns_empty_string() -> None:
    cfg = ChatConfig(BACKEND_URLS={"development": "http://localhost:3000"}, ENVIRONMENT="qa")
    assert cfg.get_backend_url() == ""
    assert cfg.get_api_url() == "/api"
    assert cfg.get_websocket_url() == ""


@pytest.mark.parametrize("environment", ["development", "staging", "production", "qa"])
def test_api_url_appends_api(environment: str) -> None:
    cfg = ChatConfig(ENVIRONMENT=environment)
    assert cfg.get_api_url() == cfg.get_backend_url() + "/api"


@pytest.mark.parametrize(
    "backend_url, expected",
    [
        ("https://host/path", "wss://host/path"),
        ("http://host/path", "ws://host/path"),
        ("ftp://host/path", "ftp://host/path"),
        ("host/path", "host/path"),
        # Only the first occurrence of each prefix is rewritten.
        ("https://host/redirect?to=https://other", "wss://host/redirect?to=https://other"),
    ],
)
def test_websocket_url_scheme_substitution(backend_url: str, expected: str) -> None:
    cfg = ChatConfig(BACKEND_URLS={"production": backend_url}, ENVIRONMENT="production")
    assert cfg.get_websocket_url() == expected


def test_default_websocket_urls() -> None:
    assert ChatConfig(ENVIRONMENT="development").get_websocket_url() == "ws://localhost:3000"
    assert (
        ChatConfig(ENVIRONMENT="production").get_websocket_url()
        == "wss://realtimechattt.netlify.app/.netlify/functions"
    )


def test_environment_predicates() -> None:
    cfg = ChatConfig()
    assert cfg.is_development()
    assert not cfg.is_production()

    cfg.ENVIRONMENT = Environment.PRODUCTION.value
    assert cfg.is_production()
    assert not cfg.is_development()

    cfg.ENVIRONMENT = "staging"
    assert not cfg.is_production()
    assert not cfg.is_development()


def test_feature_flags() -> None:
    cfg = ChatConfig()
    assert cfg.is_feature_enabled("privateMessages") is True
    assert cfg.is_feature_enabled("fileUpload") is False
    assert cfg.is_feature_enabled("nonexistentFeature") is False
    assert cfg.is_feature_enabled("") is False


def test_default_groups() -> None:
    cfg = ChatConfig()
    assert cfg.WS_CONFIG.auto_reconnect is True
    assert cfg.WS_CONFIG.reconnect_interval == 3000
    assert cfg.WS_CONFIG.max_reconnect_attempts == 10
    assert cfg.WS_CONFIG.connection_timeout == 10000
    assert cfg.API_CONFIG.timeout == 10000
    assert cfg.API_CONFIG.retries == 3
    assert cfg.API_CONFIG.retry_delay == 1000
    assert cfg.APP_CONFIG.max_chat_history == 100
    assert cfg.APP_CONFIG.default_preferences.theme == "light"
    assert cfg.APP_CONFIG.default_preferences.font_size == "medium"
    assert cfg.FEATURES == DEFAULT_FEATURES


def test_instances_do_not_share_mutable_defaults() -> None:
    first = ChatConfig()
    second = ChatConfig()
    first.FEATURES["fileUpload"] = True
    first.BACKEND_URLS["development"] = "http://localhost:9999"
    first.WS_CONFIG.reconnect_interval = 1

    assert second.is_feature_enabled("fileUpload") is False
    assert second.get_backend_url() == "http://localhost:3000"
    assert second.WS_CONFIG.reconnect_interval == 3000
    assert DEFAULT_FEATURES["fileUpload"] is False


def test_summary() -> None:
    cfg = ChatConfig()
    assert cfg.summary() == {
        "environment": "development",
        "backendUrl": "http://localhost:3000",
        "apiUrl": "http://localhost:3000/api",
        "wsUrl": "ws://localhost:3000",
    }
    assert cfg.summary(include_features=True)["features"] == DEFAULT_FEATURES


def test_as_dict_uses_camel_case_names() -> None:
    data = ChatConfig().as_dict()
    assert set(data) == {"BACKEND_URLS", "ENVIRONMENT", "WS_CONFIG", "API_CONFIG", "APP_CONFIG", "FEATURES"}
    assert data["WS_CONFIG"]["reconnectInterval"] == 3000
    assert data["APP_CONFIG"]["defaultPreferences"]["soundEnabled"] is True


def test_snapshot_is_detached() -> None:
    cfg = ChatConfig()
    frozen = cfg.snapshot()
    cfg.override({"ENVIRONMENT": "production", "FEATURES": {"videoChat": True}})

    assert frozen.ENVIRONMENT == "development"
    assert frozen.is_feature_enabled("videoChat") is False
    assert cfg.is_feature_enabled("videoChat") is True


def test_module_singleton() -> None:
    assert isinstance(config, ChatConfig)
    assert config.get_api_url().endswith("/api")
