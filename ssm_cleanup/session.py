"""AWS client creation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import boto3

if TYPE_CHECKING:
    from mypy_boto3_ssm.client import SSMClient

    from ._logging import SsmCleanupLogger

LOGGER = cast("SsmCleanupLogger", logging.getLogger(__name__))


def create_ssm_client(region: str, endpoint_url: str | None = None) -> SSMClient:
    """Create an SSM client, optionally pointed at an emulated endpoint.

    Args:
        region: AWS region of the client.
        endpoint_url: Endpoint to use instead of the public AWS endpoint.

    """
    session = boto3.Session(region_name=region)
    if endpoint_url:
        LOGGER.verbose('creating SSM client in region "%s" for endpoint %s', region, endpoint_url)
        return session.client("ssm", endpoint_url=endpoint_url)
    LOGGER.debug('creating SSM client in region "%s"', region)
    return session.client("ssm")
