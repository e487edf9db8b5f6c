"""Pytest fixtures and plugins."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import boto3
import pytest
from botocore.stub import Stubber

from ssm_cleanup.environment import EnvironmentVariables
from ssm_cleanup.events import EventBus
from ssm_cleanup.plugin import SsmCleanupPlugin

from .factories import make_orchestrator_config

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mypy_boto3_ssm.client import SSMClient
    from pytest_mock import MockerFixture

LOGGER = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def aws_credentials() -> Iterator[None]:
    """Ensure AWS SDK finds some (bogus) credentials in the environment.

    Keeps the SDK from trying to use other providers.

    """
    overrides = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    saved_env: dict[str, str | None] = {}
    for key, value in overrides.items():
        LOGGER.info("Overriding env var: %s=%s", key, value)
        saved_env[key] = os.environ.get(key, None)
        os.environ[key] = value

    yield

    for key, value in saved_env.items():
        LOGGER.info("Restoring saved env var: %s=%s", key, value)
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture(autouse=True)
def shared_event_bus() -> Iterator[EventBus]:
    """Provide a fresh shared event bus for each test."""
    EventBus.reset_instance()
    yield EventBus.get_instance()
    EventBus.reset_instance()


@pytest.fixture
def environment() -> EnvironmentVariables:
    """Environment variables with an aggressive deploy environment."""
    return EnvironmentVariables(
        environ={"AWS_REGION": "us-east-1", "CDK_ENVIRONMENT": "development"}
    )


@pytest.fixture
def event_bus() -> EventBus:
    """Event bus that is not shared."""
    return EventBus()


@pytest.fixture
def ssm_client() -> SSMClient:
    """Real SSM client meant to be stubbed."""
    return boto3.client("ssm", region_name="us-east-1")


@pytest.fixture
def ssm_stubber(ssm_client: SSMClient) -> Iterator[Stubber]:
    """Activated stubber of ``ssm_client``."""
    with Stubber(ssm_client) as stubber:
        yield stubber


@pytest.fixture
def mock_create_ssm_client(mocker: MockerFixture, ssm_client: SSMClient) -> MagicMock:
    """Patch client creation of the plugin to return ``ssm_client``."""
    return mocker.patch("ssm_cleanup.plugin.create_ssm_client", return_value=ssm_client)


@pytest.fixture
def plugin(
    environment: EnvironmentVariables,
    event_bus: EventBus,
    mock_create_ssm_client: MagicMock,  # noqa: ARG001
) -> SsmCleanupPlugin:
    """Initialized plugin."""
    obj = SsmCleanupPlugin(environment=environment, event_bus=event_bus)
    obj.initialize(
        {}, make_orchestrator_config("local", "development", "test", "production")
    )
    return obj
