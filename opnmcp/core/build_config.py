"""
Build configuration: which core modules and plugins are compiled into this server.

The build configuration is fixed at packaging time and loaded once per process.
It resolves into the set of qualified module names ('core.<name>',
'plugins.<name>') that drives catalog filtering and the availability gate.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from opnmcp.api.schemas import CORE_FAMILY, PLUGIN_FAMILY
from opnmcp.core.errors import BuildConfigError
from opnmcp.core.logger import logger


def _flag_map(value: Any) -> dict[str, bool]:
    """
    Coerce a modules section into {name: enabled}.

    Only a JSON true enables a module; a malformed section is an empty map.
    """
    if not isinstance(value, Mapping):
        return {}
    return {str(name): enabled is True for name, enabled in value.items()}


class CoreSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    description: str = ""
    modules: dict[str, bool] = Field(default_factory=dict)

    @field_validator("modules", mode="before")
    @classmethod
    def _coerce_modules(cls, value: Any) -> dict[str, bool]:
        return _flag_map(value)


class PluginSection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    description: str = ""
    # Wildcard: ship every listed plugin and gate at runtime instead
    include_all: bool = Field(default=False, alias="includeAll")
    modules: dict[str, bool] = Field(default_factory=dict)

    @field_validator("include_all", mode="before")
    @classmethod
    def _strict_include_all(cls, value: Any) -> bool:
        return value is True

    @field_validator("modules", mode="before")
    @classmethod
    def _coerce_modules(cls, value: Any) -> dict[str, bool]:
        return _flag_map(value)


class BuildConfig(BaseModel):
    """Static declaration of the modules compiled into this server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    core: CoreSection = Field(default_factory=CoreSection)
    plugins: PluginSection = Field(default_factory=PluginSection)

    @model_validator(mode="after")
    def _check_disjoint(self) -> "BuildConfig":
        overlap = set(self.core.modules) & set(self.plugins.modules)
        if overlap:
            raise ValueError(
                f"Modules declared as both core and plugin: {', '.join(sorted(overlap))}"
            )
        return self


def resolve_available_modules(build_config: BuildConfig | Mapping[str, Any] | None) -> frozenset[str]:
    """
    Turn a build configuration into the set of available qualified module names.

    Core modules are included when their flag is true. Plugins are included when
    their flag is true, or unconditionally when plugins.includeAll is set.

    Args:
        build_config: A BuildConfig, or the raw mapping it was loaded from

    Returns:
        Frozen set of 'core.<name>' / 'plugins.<name>' identifiers
    """
    if isinstance(build_config, BuildConfig):
        core_modules = build_config.core.modules
        plugin_modules = build_config.plugins.modules
        include_all = build_config.plugins.include_all
    else:
        raw = build_config if isinstance(build_config, Mapping) else {}
        core = raw.get("core") if isinstance(raw.get("core"), Mapping) else {}
        plugins = raw.get("plugins") if isinstance(raw.get("plugins"), Mapping) else {}
        core_modules = _flag_map(core.get("modules"))
        plugin_modules = _flag_map(plugins.get("modules"))
        include_all = plugins.get("includeAll") is True

    modules = {f"{CORE_FAMILY}.{name}" for name, enabled in core_modules.items() if enabled}
    modules.update(
        f"{PLUGIN_FAMILY}.{name}"
        for name, enabled in plugin_modules.items()
        if include_all or enabled
    )
    return frozenset(modules)


def load_build_config(path: Path) -> BuildConfig:
    """
    Load and validate the build configuration file.

    Raises:
        BuildConfigError: if the file cannot be read or fails validation
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise BuildConfigError(f"Could not read build configuration {path}: {e}") from e

    try:
        config = BuildConfig.model_validate(raw)
    except ValidationError as e:
        raise BuildConfigError(f"Invalid build configuration {path}: {e}") from e

    core_count = sum(config.core.modules.values())
    logger.info(
        f"Build configuration loaded from {path}: {core_count} core modules, "
        f"{len(config.plugins.modules)} plugins (includeAll={config.plugins.include_all})"
    )
    return config
