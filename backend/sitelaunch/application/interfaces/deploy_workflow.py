"""Deploy workflow port: the external automation that builds and hosts sites."""

from abc import ABC, abstractmethod
from typing import Any


class DeployWorkflowClient(ABC):
    """Defines what the application layer needs from the deploy workflow."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when no target is configured; deliveries are then deferred."""
        ...

    @abstractmethod
    async def trigger(self, payload: dict[str, Any]) -> None:
        """Hand a client record over for deployment.

        Raises:
            UpstreamServiceError: If the workflow rejects or cannot be reached.
        """
        ...
