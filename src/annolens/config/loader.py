"""Load AnnolensConfig from YAML layers, the environment and keyword overrides.

Later entries win:

- built-in defaults
- ~/.config/annolens/config.yaml
- the project file (explicit path, else ./annolens.yaml)
- ANNOLENS__SECTION__KEY environment variables
- keyword arguments to load_config()

Each layer may set only part of a section; pydantic-settings merges nested
sections key by key.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from annolens.config.models import (
    AnnolensConfig,
    IntrospectionConfig,
    LoggingConfig,
    ResolverConfig,
)
from annolens.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/annolens/config.yaml").expanduser()
PROJECT_CONFIG_NAME = "annolens.yaml"


def _read_layer(path: Path) -> dict[str, Any]:
    """Mapping stored in one YAML layer; an absent file is an empty layer."""
    if not path.is_file():
        return {}
    try:
        layer = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if layer is None:
        return {}
    if not isinstance(layer, dict):
        raise ConfigError.parse_error(str(path), f"expected a mapping, got {type(layer).__name__}")
    return layer


def _settings_for(project: dict[str, Any], user: dict[str, Any]) -> type[BaseSettings]:
    # Built per call so concurrent loads never share YAML state
    class AnnolensSettings(BaseSettings):
        model_config = SettingsConfigDict(
            env_prefix="ANNOLENS__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        resolver: ResolverConfig = ResolverConfig()
        introspection: IntrospectionConfig = IntrospectionConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            return (
                init_settings,
                env_settings,
                InitSettingsSource(settings_cls, init_kwargs=project),
                InitSettingsSource(settings_cls, init_kwargs=user),
            )

    return AnnolensSettings


def load_config(path: Path | None = None, **kwargs: Any) -> AnnolensConfig:
    """Resolve the configuration from every layer.

    Args:
        path: Project config file, which must exist when given. Without it,
            ./annolens.yaml is used if present.
        **kwargs: Section overrides, e.g. ``resolver=ResolverConfig(...)``.

    Raises:
        ConfigError: Missing explicit file, unreadable YAML or a value that
            fails validation.
    """
    if path is not None and not path.exists():
        raise ConfigError.file_not_found(str(path))

    settings_cls = _settings_for(
        project=_read_layer(path or Path.cwd() / PROJECT_CONFIG_NAME),
        user=_read_layer(GLOBAL_CONFIG_PATH),
    )
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigError.invalid_value(
            ".".join(str(part) for part in first["loc"]), first.get("input"), first["msg"]
        ) from e
    return AnnolensConfig.model_validate(settings.model_dump())
