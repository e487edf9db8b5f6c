"""Plugin deleting SSM parameters of destroyed stacks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, cast

from pydantic import ValidationError

from ._logging import PrefixAdaptor
from .config import OrchestratorConfig, PluginConfig, parse_config
from .environment import EnvironmentVariables
from .events import EventBus, EventTypes, PluginErrorEventData, StackDestroyEventData
from .session import create_ssm_client
from .utils import chunk_list

if TYPE_CHECKING:
    from collections.abc import Sequence

    from mypy_boto3_ssm.client import SSMClient

    from ._logging import SsmCleanupLogger
    from .events import Event
    from .protocols import EnvironmentProviderProtocol, EventBusProtocol

LOGGER = cast("SsmCleanupLogger", logging.getLogger(__name__))

BATCH_SIZE = 10
"""Maximum number of parameter names accepted by one ``DeleteParameters`` call."""


def _event_data(event: Event | Any) -> Any:
    """Payload of an event, accepting either the envelope or the bare payload."""
    return getattr(event, "data", event)


class SsmCleanupPlugin:
    """Delete SSM parameters scoped under a stack after it is destroyed.

    In aggressive environments every parameter that might belong to the stack
    is removed. Elsewhere, only parameters under ``/<stack name>/`` are removed.

    """

    name: ClassVar[str] = "@orcdkestrator/orcdk-plugin-ssm-cleanup"
    version: ClassVar[str] = "1.0.0"

    aggressive_environments: list[str]
    config: PluginConfig | None
    event_bus: EventBusProtocol | None
    orchestrator_config: OrchestratorConfig | None
    ssm: SSMClient | None

    def __init__(
        self,
        *,
        environment: EnvironmentProviderProtocol | None = None,
        event_bus: EventBusProtocol | None = None,
    ) -> None:
        """Instantiate class.

        Args:
            environment: Source of environment settings.
                Defaults to the environment variables of the process.
            event_bus: Event bus to subscribe to.
                Defaults to the shared :class:`~ssm_cleanup.events.EventBus`.

        """
        self._event_bus_override = event_bus
        self.aggressive_environments = []
        self.config = None
        self.environment = environment or EnvironmentVariables()
        self.event_bus = None
        self.logger = PrefixAdaptor("ssm-cleanup", LOGGER)
        self.orchestrator_config = None
        self.ssm = None

    def initialize(
        self,
        config: PluginConfig | dict[str, Any] | None,
        orchestrator_config: OrchestratorConfig | dict[str, Any],
    ) -> None:
        """Initialize plugin with configuration.

        Args:
            config: Configuration of this plugin.
            orchestrator_config: Global orchestrator configuration.

        Raises:
            InvalidConfigError: A configuration failed validation.

        """
        self.config = parse_config(PluginConfig, config, "plugin config")
        self.orchestrator_config = parse_config(
            OrchestratorConfig, orchestrator_config, "orchestrator config"
        )
        self.aggressive_environments = list(self.config.options.aggressive_environments)

        self.ssm = create_ssm_client(
            self.environment.aws_region,
            endpoint_url=self.orchestrator_config.get_aws_endpoint(),
        )

        self.event_bus = self._event_bus_override or EventBus.get_instance()
        self._subscribe_to_events()
        self.logger.debug(
            "initialized; aggressive environments: %s",
            ", ".join(self.aggressive_environments),
        )

    def _subscribe_to_events(self) -> None:
        """Subscribe to relevant events."""
        if not self.event_bus:
            return
        self.event_bus.subscribe(EventTypes.AFTER_STACK_DESTROY, self._on_stack_destroyed)
        self.event_bus.subscribe(EventTypes.PLUGIN_ERROR, self._on_plugin_error)

    def _on_stack_destroyed(self, event: Event | Any) -> None:
        """Handle an ``orchestrator:after:stack-destroy`` event."""
        try:
            data = StackDestroyEventData.model_validate(_event_data(event))
        except ValidationError as exc:
            self.logger.error("ignoring malformed stack destroy event: %s", exc)
            return
        if data.success:
            self.cleanup_stack_parameters(data.stack_name)
        else:
            self.logger.debug("stack %s was not destroyed; skipping cleanup", data.stack_name)

    def _on_plugin_error(self, event: Event | Any) -> None:
        """Handle a ``plugin:error`` event."""
        try:
            data = PluginErrorEventData.model_validate(_event_data(event))
        except ValidationError:
            self.logger.error("Error in unknown context: %s", _event_data(event))
            return
        self.logger.error("Error in %s: %s", data.context, data.error_message)

    def cleanup_stack_parameters(self, stack_name: str) -> None:
        """Cleanup SSM parameters for a specific stack.

        Does nothing unless the plugin is initialized and the active
        deployment environment is defined in the orchestrator config.

        """
        if not self.ssm or not self.orchestrator_config:
            return

        current_env = self.environment.deploy_environment
        if not current_env:
            self.logger.debug("deploy environment not set; skipping cleanup")
            return
        if current_env not in self.orchestrator_config.environments:
            self.logger.debug('environment "%s" is not configured; skipping cleanup', current_env)
            return

        self.logger.info("Cleaning up parameters for stack: %s", stack_name)
        try:
            if current_env in self.aggressive_environments:
                self.aggressive_cleanup(stack_name)
            else:
                self.conservative_cleanup(stack_name)
        except Exception:  # noqa: BLE001
            self.logger.exception("Failed to cleanup parameters for %s", stack_name)

    def aggressive_cleanup(self, stack_name: str) -> None:
        """Remove all parameters that might be related to the stack."""
        lower_name = stack_name.lower()
        self._cleanup_prefixes(
            [
                f"/{stack_name}/",
                f"/{lower_name}/",
                f"/{stack_name}",
                f"/{lower_name}",
            ]
        )

    def conservative_cleanup(self, stack_name: str) -> None:
        """Remove only parameters under the exact stack name."""
        self._cleanup_prefixes([f"/{stack_name}/"])

    def _cleanup_prefixes(self, prefixes: Sequence[str]) -> None:
        """List then delete parameters of each prefix, in order.

        A failure for one prefix does not prevent the others from being processed.

        """
        if not self.ssm:
            return
        for prefix in prefixes:
            try:
                parameters = self.list_parameters_by_prefix(prefix)
                if parameters:
                    self.delete_parameters(parameters)
                    self.logger.success(
                        "Deleted %s parameters with prefix: %s", len(parameters), prefix
                    )
                else:
                    self.logger.debug("no parameters found with prefix: %s", prefix)
            except Exception as exc:  # noqa: BLE001
                self.logger.warning("Failed to cleanup prefix %s: %s", prefix, exc)

    def list_parameters_by_prefix(self, prefix: str) -> list[str]:
        """Names of all parameters under a path, recursively, in encounter order."""
        if not self.ssm:
            return []

        parameters: list[str] = []
        paginator = self.ssm.get_paginator("get_parameters_by_path")
        for page in paginator.paginate(Path=prefix, Recursive=True):
            parameters.extend(
                param["Name"] for param in page.get("Parameters", []) if param.get("Name")
            )
        return parameters

    def delete_parameters(self, parameter_names: Sequence[str]) -> None:
        """Delete parameters in batches of :data:`BATCH_SIZE`.

        A failed batch is logged and the remaining batches are still attempted.

        """
        if not self.ssm or not parameter_names:
            return

        for batch in chunk_list(parameter_names, BATCH_SIZE):
            try:
                response = self.ssm.delete_parameters(Names=batch)
            except Exception as exc:  # noqa: BLE001
                self.logger.warning(
                    "Failed to delete parameter batch %s: %s", ", ".join(batch), exc
                )
                continue
            if response.get("InvalidParameters"):
                self.logger.debug(
                    "parameters not found while deleting: %s",
                    ", ".join(response["InvalidParameters"]),
                )

    def cleanup_all_parameters(self) -> None:
        """Delete every parameter in the account and region.

        Only permitted in aggressive environments.

        """
        if not self.ssm:
            return

        current_env = self.environment.deploy_environment
        if not current_env or current_env not in self.aggressive_environments:
            self.logger.warning("Full cleanup not allowed in environment: %s", current_env)
            return

        self.logger.info("Performing full parameter cleanup for %s", current_env)
        try:
            all_parameters = self.list_parameters_by_prefix("/")
            if all_parameters:
                self.delete_parameters(all_parameters)
                self.logger.success("Deleted %s parameters", len(all_parameters))
            else:
                self.logger.info("No parameters found to delete")
        except Exception:  # noqa: BLE001
            self.logger.exception("Failed to perform full cleanup")

    def cleanup(self) -> None:
        """Unsubscribe from events."""
        if self.event_bus:
            self.event_bus.unsubscribe_all(EventTypes.AFTER_STACK_DESTROY)
            self.event_bus.unsubscribe_all(EventTypes.PLUGIN_ERROR)
