"""SSM cleanup exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pydantic import ValidationError


class SsmCleanupError(Exception):
    """Base class for custom exceptions raised by the SSM cleanup plugin."""

    message: str = ""
    """Error message."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Instantiate class."""
        if self.message:
            super().__init__(self.message, *args, **kwargs)
        else:
            super().__init__(*args, **kwargs)


class InvalidConfigError(SsmCleanupError):
    """Configuration provided to the plugin failed validation."""

    cause: ValidationError
    """Validation error raised while parsing the configuration."""

    config_name: str
    """Name of the configuration object that failed validation."""

    def __init__(self, config_name: str, cause: ValidationError) -> None:
        """Instantiate class.

        Args:
            config_name: Name of the configuration object that failed validation.
            cause: Validation error raised while parsing the configuration.

        """
        self.cause = cause
        self.config_name = config_name
        self.message = (
            f"invalid {config_name}; {cause.error_count()} validation error(s)\n{cause}"
        )
        super().__init__()
