"""SSM cleanup logging."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, MutableMapping


class LogLevels(IntEnum):
    """Log levels added on top of the built-in ones."""

    VERBOSE = 15
    SUCCESS = 35


class PrefixAdaptor(logging.LoggerAdapter):
    """LoggerAdapter that adds a prefix to messages.

    Example:
        >>> logger = PrefixAdaptor("ssm-cleanup", logging.getLogger("example"))
        ... logger.info("my message")
        [ssm-cleanup] my message

    """

    def __init__(
        self,
        prefix: str,
        logger: logging.Logger,
        prefix_template: str = "[{prefix}] {msg}",
    ) -> None:
        """Instantiate class.

        Args:
            prefix: Message prefix.
            logger: Logger where the prefixed messages will be sent.
            prefix_template: Template formatted with ``prefix`` and ``msg``.

        """
        super().__init__(logger, {})
        self.prefix = prefix
        self.prefix_template = prefix_template

    def process(
        self, msg: Exception | str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        """Prepend the prefix to a message."""
        return self.prefix_template.format(prefix=self.prefix, msg=msg), kwargs

    def success(self, msg: Exception | str, *args: Any, **kwargs: Any) -> None:
        """Delegate a success call to the underlying logger."""
        self.log(LogLevels.SUCCESS, msg, *args, **kwargs)


class SsmCleanupLogger(logging.Logger):
    """Logger with ``VERBOSE`` and ``SUCCESS`` levels."""

    def __init__(self, name: str, level: int | str = logging.NOTSET) -> None:
        """Instantiate the class.

        Args:
            name: Logger name.
            level: Log level.

        """
        super().__init__(name, level)
        logging.addLevelName(LogLevels.VERBOSE, LogLevels.VERBOSE.name)
        logging.addLevelName(LogLevels.SUCCESS, LogLevels.SUCCESS.name)

    def success(self, msg: Exception | str, *args: Any, **kwargs: Any) -> None:
        """Log 'msg % args' with severity `SUCCESS`."""
        if self.isEnabledFor(LogLevels.SUCCESS):
            self._log(LogLevels.SUCCESS, msg, args, **kwargs)

    def verbose(self, msg: Exception | str, *args: Any, **kwargs: Any) -> None:
        """Log 'msg % args' with severity `VERBOSE`."""
        if self.isEnabledFor(LogLevels.VERBOSE):
            self._log(LogLevels.VERBOSE, msg, args, **kwargs)
