"""
MODULE OVERVIEW:
The chat client configuration store.
Where it fits: every other part of the client (WebSocket layer, UI, probes) reads
backend URLs, reconnect parameters and feature flags from here.

WHAT IS HAPPENING HERE:
`ChatConfig` holds the settings groups plus a handful of derived-value getters.
A single process-wide instance, `config`, is built at import time: compiled-in
defaults first, then host-name detection when a host is known.

Nothing in here raises. A missing backend URL falls back to production, an
unknown feature flag reads as disabled, and malformed override input is logged
and skipped. Callers that want a value that will not move under them can take a
`snapshot()`, or build their own instance with `ChatConfig.build()`.
"""
from typing import Any, Mapping

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from chat_client.detection import detect_environment
from chat_client.models import (
    DEFAULT_BACKEND_URLS,
    DEFAULT_FEATURES,
    ApiConfig,
    AppConfig,
    Environment,
    SettingsGroup,
    WsConfig,
)
from chat_client.settings import settings

# Groups that `override` merges one level deep. ENVIRONMENT is a scalar and is
# handled separately.
MERGED_GROUPS = ("BACKEND_URLS", "WS_CONFIG", "API_CONFIG", "APP_CONFIG", "FEATURES")


class ChatConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    BACKEND_URLS: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_BACKEND_URLS))
    # Options: 'development', 'staging', 'production'. Stored as a plain string so
    # an override can point at an environment with no URL entry.
    ENVIRONMENT: str = Environment.DEVELOPMENT.value
    WS_CONFIG: WsConfig = Field(default_factory=WsConfig)
    API_CONFIG: ApiConfig = Field(default_factory=ApiConfig)
    APP_CONFIG: AppConfig = Field(default_factory=AppConfig)
    FEATURES: dict[str, bool] = Field(default_factory=lambda: dict(DEFAULT_FEATURES))

    @classmethod
    def build(cls, hostname: str | None = None, overrides: Mapping[str, Any] | None = None) -> "ChatConfig":
        """
        Defaults, then host-name detection, then explicit overrides.
        """
        cfg = cls()
        if hostname:
            cfg.apply_hostname(hostname)
        if overrides:
            cfg.override(overrides)
        return cfg

    def get_backend_url(self) -> str:
        return self.BACKEND_URLS.get(self.ENVIRONMENT) or self.BACKEND_URLS.get(Environment.PRODUCTION.value) or ""

    def get_api_url(self) -> str:
        return f"{self.get_backend_url()}/api"

    def get_websocket_url(self) -> str:
        # First occurrence only; a URL with neither scheme comes back untouched.
        return self.get_backend_url().replace("https://", "wss://", 1).replace("http://", "ws://", 1)

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT.value

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION.value

    def is_feature_enabled(self, feature: str) -> bool:
        try:
            return bool(self.FEATURES.get(feature, False))
        except TypeError:
            # Unhashable names cannot be flags.
            return False

    def apply_hostname(self, hostname: str) -> None:
        self.ENVIRONMENT = detect_environment(hostname, default=self.ENVIRONMENT)

    def override(self, overrides: Mapping[str, Any]) -> None:
        """
        Merge a partial configuration into this one.

        Each group present in `overrides` is merged one level deep: keys given
        overwrite, keys not given are preserved. ENVIRONMENT is replaced outright.
        Unrecognised top-level keys are ignored.
        """
        if not isinstance(overrides, Mapping):
            logger.warning(f"Ignoring configuration override of type {type(overrides).__name__}")
            overrides = {}

        for group_name in MERGED_GROUPS:
            updates = overrides.get(group_name)
            if not updates:
                continue
            if not isinstance(updates, Mapping):
                logger.warning(f"group={group_name} type={type(updates).__name__} reason=not_a_mapping")
                continue
            group = getattr(self, group_name)
            if isinstance(group, SettingsGroup):
                group.merge(updates)
            elif group_name == "BACKEND_URLS":
                for env_name, url in updates.items():
                    if isinstance(url, str):
                        group[env_name] = url
                    else:
                        logger.warning(f"group=BACKEND_URLS key={env_name!r} type={type(url).__name__} reason=not_a_string")
            else:
                group.update(updates)

        environment = overrides.get("ENVIRONMENT")
        if isinstance(environment, Environment):
            self.ENVIRONMENT = environment.value
        elif isinstance(environment, str) and environment:
            self.ENVIRONMENT = environment
        elif environment:
            logger.warning(f"group=ENVIRONMENT type={type(environment).__name__} reason=not_a_string")

        summary = self.summary()
        logger.info(
            f"Configuration updated: environment={summary['environment']} "
            f"backendUrl={summary['backendUrl']} apiUrl={summary['apiUrl']} wsUrl={summary['wsUrl']}"
        )

    def summary(self, include_features: bool = False) -> dict[str, Any]:
        data: dict[str, Any] = {
            "environment": self.ENVIRONMENT,
            "backendUrl": self.get_backend_url(),
            "apiUrl": self.get_api_url(),
            "wsUrl": self.get_websocket_url(),
        }
        if include_features:
            data["features"] = dict(self.FEATURES)
        return data

    def snapshot(self) -> "ChatConfig":
        return self.model_copy(deep=True)

    def as_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# The singleton instance used client-wide
config = ChatConfig.build(hostname=settings.HOSTNAME)

if config.is_development():
    _startup = config.summary(include_features=True)
    logger.info(
        f"Chat App Configuration: environment={_startup['environment']} "
        f"backendUrl={_startup['backendUrl']} apiUrl={_startup['apiUrl']} "
        f"wsUrl={_startup['wsUrl']} features={_startup['features']}"
    )
