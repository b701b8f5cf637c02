"""Site generation use case: render a client's page and cache it on the record."""

import logging

from sitelaunch.application.interfaces import ClientRecordRepository, SiteRenderer
from sitelaunch.domain.entities import ClientRecord
from sitelaunch.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class SiteGenerationService:
    def __init__(self, repository: ClientRecordRepository, renderer: SiteRenderer):
        self._repository = repository
        self._renderer = renderer

    async def generate_for_client(self, client_id: str) -> ClientRecord:
        """Render the client's template and store it as ``site_data``.

        Raises:
            EntityNotFoundError: Unknown client id.
            UnknownTemplateError: The record names a template with no generator.
        """
        client = await self._repository.get_by_id(client_id)
        if client is None:
            raise EntityNotFoundError("ClientRecord", client_id)

        html = self._renderer.generate(client.template_id, client)
        client.cache_site(html)
        client = await self._repository.update(client)
        logger.info(
            "Generated %s site for %s (%d bytes)",
            client.template_id,
            client.subdomain,
            len(html),
        )
        return client
