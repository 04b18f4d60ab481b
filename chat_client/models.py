"""
MODULE OVERVIEW:
This module defines the typed settings groups that make up the chat client
configuration, powered by Pydantic v2.

WHAT IS HAPPENING HERE:
Each group (WebSocket, API, application, user preferences) is its own model with
snake_case fields for Python callers and camelCase aliases for the JSON-shaped
override payloads the browser client uses. Groups are merged one level deep:
keys present in an update overwrite, keys absent are left alone.
"""
from enum import Enum
from typing import Any, Mapping

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_BACKEND_URLS: dict[str, str] = {
    # Netlify Functions deployment
    Environment.PRODUCTION.value: "https://realtimechattt.netlify.app/.netlify/functions",
    Environment.DEVELOPMENT.value: "http://localhost:3000",
    Environment.STAGING.value: "https://realtimechat-staging.onrender.com",
}

DEFAULT_FEATURES: dict[str, bool] = {
    "fileUpload": False,
    "voiceMessages": False,
    "videoChat": False,
    "screenShare": False,
    "privateMessages": True,
    "roomSearch": True,
    "userProfiles": True,
}


class SettingsGroup(BaseModel):
    """
    Base for every settings group. Unknown keys are kept as extras so an
    override can add settings the client does not know about yet.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    @classmethod
    def field_name(cls, key: str) -> str:
        for name, info in cls.model_fields.items():
            if key == name or key == info.alias:
                return name
        return key

    def merge(self, updates: Mapping[str, Any]) -> None:
        for key, value in updates.items():
            if not isinstance(key, str) or key.startswith("_"):
                logger.warning(f"group={type(self).__name__} key={key!r} reason=unsupported_key")
                continue
            name = self.field_name(key)
            current = getattr(self, name, None)
            # Nested records are replaced wholesale, not deep-merged.
            if isinstance(current, SettingsGroup) and isinstance(value, Mapping):
                group_cls = type(current)
                value = group_cls.model_construct(
                    **{group_cls.field_name(k): v for k, v in value.items() if isinstance(k, str)}
                )
            if name in type(self).model_fields:
                setattr(self, name, value)
            else:
                # Written to the extras directly so a key can never shadow a method.
                self.__pydantic_extra__[name] = value


# WHAT IS HAPPENING HERE:
# Durations are kept in milliseconds, exactly like the browser client's timers.
class WsConfig(SettingsGroup):
    auto_reconnect: bool = True
    reconnect_interval: int = 3000
    max_reconnect_attempts: int = Field(default=10, ge=0)
    connection_timeout: int = 10000


class ApiConfig(SettingsGroup):
    timeout: int = 10000
    retries: int = Field(default=3, ge=0)
    retry_delay: int = 1000


class UserPreferences(SettingsGroup):
    theme: str = "light"
    notifications: bool = True
    sound_enabled: bool = True
    auto_connect: bool = True
    message_limit: int = 100
    font_size: str = "medium"


class AppConfig(SettingsGroup):
    max_chat_history: int = 100
    max_room_history: int = 10
    default_preferences: UserPreferences = Field(default_factory=UserPreferences)

    # Chat
    max_message_length: int = 1000
    typing_indicator_timeout: int = 3000

    # UI
    animations_enabled: bool = True
    compact_mode: bool = False
