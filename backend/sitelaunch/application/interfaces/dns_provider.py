"""DNS provider port: manages the CNAME record behind a client subdomain."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class DnsResult:
    success: bool
    record_id: str | None = None
    error: str | None = None


@dataclass
class DnsLookup:
    exists: bool
    record_id: str | None = None


class DnsProvider(ABC):
    """Port for CNAME management. Failures are reported, never raised."""

    @abstractmethod
    async def create_cname(self, subdomain: str) -> DnsResult:
        ...

    @abstractmethod
    async def delete_record(self, record_id: str) -> DnsResult:
        ...

    @abstractmethod
    async def find_cname(self, subdomain: str) -> DnsLookup:
        ...
