"""Process environment used to select the deployment environment."""

from __future__ import annotations

import os
from typing import MutableMapping

DEFAULT_AWS_REGION = "us-west-2"


class EnvironmentVariables:
    """Environment variables read by the plugin.

    Values are looked up each time they are accessed so a long lived plugin
    follows changes made to the environment after it was created.

    """

    vars: MutableMapping[str, str]

    def __init__(self, *, environ: MutableMapping[str, str] | None = None) -> None:
        """Instantiate class.

        Args:
            environ: Environment variables. Defaults to ``os.environ`` itself.

        """
        self.vars = os.environ if environ is None else environ

    @property
    def aws_region(self) -> str:
        """Get AWS region from environment variables."""
        return self.vars.get("AWS_REGION") or DEFAULT_AWS_REGION

    @property
    def deploy_environment(self) -> str | None:
        """Name of the active deployment environment."""
        return self.vars.get("CDK_ENVIRONMENT") or None
