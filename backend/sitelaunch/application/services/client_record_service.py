"""Application service (use case) for reading client records."""

from sitelaunch.application.interfaces import ClientRecordRepository
from sitelaunch.domain.entities import ClientRecord
from sitelaunch.domain.exceptions import EntityNotFoundError


class ClientRecordService:
    """Read-side lookups used by the dashboard, status page and generated sites."""

    def __init__(self, repository: ClientRecordRepository):
        self._repository = repository

    async def get_record(self, record_id: str) -> ClientRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError("ClientRecord", record_id)
        return record

    async def get_by_subdomain(self, subdomain: str) -> ClientRecord:
        record = await self._repository.get_by_subdomain(subdomain.lower())
        if record is None:
            raise EntityNotFoundError("ClientRecord", subdomain)
        return record
