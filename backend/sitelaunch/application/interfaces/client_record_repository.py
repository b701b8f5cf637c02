"""Abstract repository interface (port) for ClientRecord persistence."""

from abc import ABC, abstractmethod

from sitelaunch.domain.entities import ClientRecord


class ClientRecordRepository(ABC):
    """Port for client record persistence, implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, record_id: str) -> ClientRecord | None:
        """Retrieve a single record by its UUID."""
        ...

    @abstractmethod
    async def get_by_subdomain(self, subdomain: str) -> ClientRecord | None:
        """Retrieve a record by subdomain, ignoring case."""
        ...

    @abstractmethod
    async def create(self, record: ClientRecord) -> ClientRecord:
        """Persist a new record and return it.

        Raises:
            DuplicateEntityError: If the subdomain is already taken. The
                storage-level uniqueness constraint is authoritative.
        """
        ...

    @abstractmethod
    async def update(self, record: ClientRecord) -> ClientRecord:
        """Update status, deployment URL and cached site data of a record."""
        ...
