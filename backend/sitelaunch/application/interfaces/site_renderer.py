"""Site renderer port: turns a client record into a static HTML document."""

from abc import ABC, abstractmethod

from sitelaunch.domain.entities import ClientRecord


class SiteRenderer(ABC):
    @abstractmethod
    def generate(self, template_id: str, record: ClientRecord, *, year: int | None = None) -> str:
        """Render the complete document for ``template_id``.

        Deterministic for identical input apart from the copyright year,
        which defaults to the current year.

        Raises:
            UnknownTemplateError: If ``template_id`` has no template.
        """
        ...
