"""
Static site generator: renders a client record into a single HTML document.

One Jinja2 template per industry, all extending ``sites/_base.html``.
Output depends only on the record, the contact endpoint and the copyright
year, so regenerating an unchanged record yields the same bytes.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from jinja2 import Environment

from sitelaunch.application.interfaces import SiteRenderer
from sitelaunch.domain.entities import ClientRecord
from sitelaunch.domain.entities.client_record import WEEKDAYS, Industry
from sitelaunch.domain.exceptions import UnknownTemplateError
from sitelaunch.infrastructure.rendering.template_environment import get_jinja_env

logger = logging.getLogger(__name__)

META_DESCRIPTION_LENGTH = 160

_TEMPLATES: dict[str, str] = {
    Industry.RESTAURANT.value: "sites/restaurant.html",
    Industry.SALON.value: "sites/salon.html",
    Industry.PLUMBER.value: "sites/plumber.html",
}

_THEMES: dict[str, dict[str, str]] = {
    Industry.RESTAURANT.value: {"gradient": "from-orange-500 to-red-600", "accent": "orange"},
    Industry.SALON.value: {"gradient": "from-purple-500 to-pink-500", "accent": "purple"},
    Industry.PLUMBER.value: {"gradient": "from-blue-600 to-gray-700", "accent": "blue"},
}

_SOCIAL_LABELS = (
    ("facebook", "Facebook"),
    ("instagram", "Instagram"),
    ("website", "Website"),
)


class SiteTemplateGenerator(SiteRenderer):
    """Jinja2-backed ``SiteRenderer``.

    ``contact_base_url`` is the public API root the generated contact form
    posts to, e.g. ``https://app.example.com/api/v1``.
    """

    def __init__(self, contact_base_url: str, templates: Environment | None = None):
        self._contact_base_url = contact_base_url.rstrip("/")
        self._templates = templates or get_jinja_env()

    def contact_url(self, subdomain: str) -> str:
        return f"{self._contact_base_url}/sites/{subdomain}/contact"

    def generate(self, template_id: str, record: ClientRecord, *, year: int | None = None) -> str:
        template_name = _TEMPLATES.get(template_id)
        if template_name is None:
            raise UnknownTemplateError(template_id)

        context = self._build_context(template_id, record, year)
        html = self._templates.get_template(template_name).render(context)
        logger.debug("Generated %s site for %s (%d bytes)", template_id, record.subdomain, len(html))
        return html

    def _build_context(
        self, template_id: str, record: ClientRecord, year: int | None
    ) -> dict[str, Any]:
        return {
            "theme": _THEMES[template_id],
            "business_name": record.business_name,
            "about_us": record.about_us,
            "description": record.about_us[:META_DESCRIPTION_LENGTH],
            "phone": record.phone,
            "email": record.email,
            "address": record.address or "",
            "services": record.services_list,
            "hours": _ordered_hours(record.hours),
            "social_links": _social_links(record.social_links),
            "contact_url": self.contact_url(record.subdomain),
            "year": year if year is not None else datetime.now(timezone.utc).year,
        }


def _ordered_hours(hours: dict[str, str | None] | None) -> list[tuple[str, str]]:
    """Weekday rows in calendar order; an empty list hides the section."""
    if not hours or not any(hours.get(day) for day in WEEKDAYS):
        return []
    return [(day, hours.get(day) or "") for day in WEEKDAYS]


def _social_links(links: dict[str, str | None] | None) -> list[tuple[str, str]]:
    # Only absolute web links become anchors.
    if not links:
        return []
    result = []
    for key, label in _SOCIAL_LABELS:
        url = (links.get(key) or "").strip()
        if url.lower().startswith(("http://", "https://")):
            result.append((label, url))
    return result
