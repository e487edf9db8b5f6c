"""Plugin and orchestrator configuration models."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any, TypeVar, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidConfigError

if TYPE_CHECKING:
    from ._logging import SsmCleanupLogger

LOGGER = cast("SsmCleanupLogger", logging.getLogger(__name__))

DEFAULT_AGGRESSIVE_ENVIRONMENTS: tuple[str, ...] = ("local", "development", "test")
"""Environments where broad, pattern based cleanup is permitted by default."""

DEFAULT_LOCALSTACK_ENDPOINT = "http://localhost:4566"

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class PluginOptions(BaseModel):
    """Options bag of the plugin configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    aggressive_environments: Annotated[
        list[str], Field(alias="aggressiveEnvironments")
    ] = list(DEFAULT_AGGRESSIVE_ENVIRONMENTS)
    """Environments where all parameters that might belong to a stack are removed."""

    @field_validator("aggressive_environments", mode="before")
    @classmethod
    def _default_when_empty(cls, v: Any) -> Any:
        """Fall back to the default environments when the value is falsy."""
        if not v:
            return list(DEFAULT_AGGRESSIVE_ENVIRONMENTS)
        return v


class PluginConfig(BaseModel):
    """Configuration the orchestrator passes to the plugin."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    enabled: bool = True
    options: Annotated[PluginOptions, Field(alias="config")] = PluginOptions()
    """Plugin specific options."""

    @field_validator("options", mode="before")
    @classmethod
    def _convert_null_options(cls, v: Any) -> Any:
        """Treat an explicit ``null`` as an empty options bag."""
        return {} if v is None else v


class EnvironmentConfig(BaseModel):
    """Settings of a single deployment environment.

    The orchestrator owns the contents; only the presence of an entry is used here.

    """

    model_config = ConfigDict(extra="allow")


class LocalStackConfig(BaseModel):
    """LocalStack emulation settings."""

    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    endpoint: str = DEFAULT_LOCALSTACK_ENDPOINT


class OrchestratorConfig(BaseModel):
    """Global orchestrator configuration."""

    model_config = ConfigDict(extra="allow")

    environments: dict[str, EnvironmentConfig] = {}
    localstack: LocalStackConfig | None = None

    @field_validator("environments", mode="before")
    @classmethod
    def _convert_null_environments(cls, v: Any) -> Any:
        """Convert null environment settings to empty settings."""
        if isinstance(v, dict):
            return {name: settings or {} for name, settings in v.items()}
        return v

    def get_aws_endpoint(self) -> str | None:
        """Endpoint AWS clients should use, if emulation is enabled."""
        if self.localstack and self.localstack.enabled:
            LOGGER.debug("using LocalStack endpoint %s", self.localstack.endpoint)
            return self.localstack.endpoint
        return None


def parse_config(model: type[_ModelT], value: _ModelT | Any, config_name: str) -> _ModelT:
    """Validate a configuration value into a model.

    Args:
        model: Model class to validate into.
        value: An instance of the model or a mapping to validate.
        config_name: Name of the configuration used in error messages.

    Raises:
        InvalidConfigError: The value failed validation.

    """
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as exc:
        raise InvalidConfigError(config_name, exc) from exc
