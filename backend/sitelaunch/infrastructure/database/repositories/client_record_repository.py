"""Concrete repository implementation for ClientRecord backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sitelaunch.application.interfaces import ClientRecordRepository
from sitelaunch.domain.entities import ClientRecord, ClientStatus, Industry
from sitelaunch.domain.exceptions import DuplicateEntityError
from sitelaunch.infrastructure.database.models import ClientRecordModel


class SQLAlchemyClientRecordRepository(ClientRecordRepository):
    """Implements the ClientRecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ClientRecordModel) -> ClientRecord:
        """Map ORM model → domain entity."""
        return ClientRecord(
            id=model.id,
            business_name=model.business_name,
            subdomain=model.subdomain,
            industry=Industry(model.industry),
            email=model.email,
            phone=model.phone,
            address=model.address,
            about_us=model.about_us,
            services=list(model.services or []),
            hours=model.hours,
            social_links=model.social_links,
            template_id=model.template_id,
            status=ClientStatus(model.status),
            deployment_url=model.deployment_url,
            site_data=model.site_data,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: ClientRecord) -> ClientRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return ClientRecordModel(
            id=entity.id,
            business_name=entity.business_name,
            subdomain=entity.subdomain.lower(),
            industry=entity.industry.value,
            email=entity.email,
            phone=entity.phone,
            address=entity.address,
            about_us=entity.about_us,
            services=list(entity.services),
            hours=entity.hours,
            social_links=entity.social_links,
            template_id=entity.template_id,
            status=entity.status.value,
            deployment_url=entity.deployment_url,
            site_data=entity.site_data,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, record_id: str) -> ClientRecord | None:
        result = await self._session.get(ClientRecordModel, record_id)
        return self._to_entity(result) if result else None

    async def get_by_subdomain(self, subdomain: str) -> ClientRecord | None:
        result = await self._session.execute(
            select(ClientRecordModel).where(
                func.lower(ClientRecordModel.subdomain) == subdomain.lower()
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, record: ClientRecord) -> ClientRecord:
        model = self._to_model(record)
        self._session.add(model)
        # The request session is rolled back by its owner once this propagates.
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateEntityError(
                "ClientRecord", "subdomain", record.subdomain
            ) from exc
        return self._to_entity(model)

    async def update(self, record: ClientRecord) -> ClientRecord:
        model = await self._session.get(ClientRecordModel, record.id)
        if model is None:
            raise ValueError(f"ClientRecord {record.id} not found in database")
        model.status = record.status.value
        model.deployment_url = record.deployment_url
        model.site_data = record.site_data
        model.updated_at = record.updated_at
        await self._session.flush()
        return self._to_entity(model)
