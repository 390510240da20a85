"""i18n configuration.

``I18nConfig`` carries the settings the planner reads once per call.  It is a
``pydantic-settings`` model: constructing it reads ``I18NQL_*`` environment
variables, and a settings mapping (e.g. rows of a ``config`` table) can be
validated directly::

    config = I18nConfig()   # reads I18NQL_DEFAULT_LANG_WITHOUT_TRANSLATION
    config = I18nConfig.from_mapping({"default_lang_without_translation": "1"})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from i18nql.errors import ConfigError
from i18nql.locale.models import FallbackPolicy

#: Settings key holding the front-end fallback policy.
DEFAULT_LANG_WITHOUT_TRANSLATION = "default_lang_without_translation"

#: Prefix of environment variables read by :class:`I18nConfig`.
ENV_PREFIX = "I18NQL_"


class I18nConfig(BaseSettings):
    """Runtime i18n settings.

    Attributes:
        default_lang_without_translation: What the front end shows when a row
            has no translation in the requested locale.
            ``STRICTLY_USE_REQUESTED_LANGUAGE`` hides the row;
            ``REPLACE_BY_DEFAULT_LANGUAGE`` substitutes the default
            language's text.
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    default_lang_without_translation: FallbackPolicy = (
        FallbackPolicy.STRICTLY_USE_REQUESTED_LANGUAGE
    )

    @field_validator(DEFAULT_LANG_WITHOUT_TRANSLATION, mode="before")
    @classmethod
    def _coerce_policy(cls, value: Any) -> FallbackPolicy:
        return parse_fallback_policy(value)

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> I18nConfig:
        """Build a config from a settings mapping; missing keys use defaults.

        The environment is not consulted.

        Raises:
            ConfigError: If a value cannot be interpreted.
        """
        return cls.model_validate(dict(settings))

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> I18nConfig:
        """Build a config from ``<prefix><KEY>`` environment variables."""
        return cls(_env_prefix=prefix)


def parse_fallback_policy(value: Any) -> FallbackPolicy:
    """Interpret a stored policy value.

    Accepts a :class:`FallbackPolicy`, its integer value (as ``int`` or
    numeric string), or its member name in any case.

    Raises:
        ConfigError: If ``value`` names no policy.
    """
    if isinstance(value, FallbackPolicy):
        return value
    raw = value.strip() if isinstance(value, str) else value
    try:
        if isinstance(raw, str) and not raw.lstrip("-").isdigit():
            return FallbackPolicy[raw.upper()]
        return FallbackPolicy(int(raw))
    except (KeyError, ValueError, TypeError) as exc:
        raise ConfigError(
            DEFAULT_LANG_WITHOUT_TRANSLATION,
            value,
            allowed=[f"{p.value} ({p.name})" for p in FallbackPolicy],
        ) from exc
