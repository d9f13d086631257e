"""Data models for ghpages."""

from ghpages.models.deployment import (
    DeploymentConfig,
    DeploymentOutcome,
    DeploymentResult,
    Identity,
    RemoteCredentials,
)

__all__ = [
    "DeploymentConfig",
    "DeploymentOutcome",
    "DeploymentResult",
    "Identity",
    "RemoteCredentials",
]
