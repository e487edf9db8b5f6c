"""Delete SSM parameters left behind by destroyed stacks."""

from __future__ import annotations

import logging

from ._logging import SsmCleanupLogger

logging.setLoggerClass(SsmCleanupLogger)

from .plugin import SsmCleanupPlugin  # noqa: E402

__all__ = ["SsmCleanupPlugin"]

__version__: str = "1.0.0"
"""Version of the Python package presented as a :class:`string`."""
