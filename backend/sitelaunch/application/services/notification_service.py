"""Notification Sender: transactional emails for deployment outcomes and site inquiries."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from jinja2 import Environment

from sitelaunch.application.interfaces import EmailProvider, OutgoingEmail
from sitelaunch.application.schemas.client import ContactInquiry
from sitelaunch.domain.entities.client_record import site_url
from sitelaunch.domain.exceptions import UpstreamServiceError
from sitelaunch.infrastructure.rendering.template_environment import get_jinja_env

logger = logging.getLogger(__name__)

NOT_CONFIGURED = "Email service not configured"

_SUCCESS_COLORS = {
    "header_background": "linear-gradient(135deg, #ef4444 0%, #dc2626 100%)",
    "button_background": "#ef4444",
}
_FAILURE_COLORS = {
    "header_background": "#dc2626",
    "button_background": "#dc2626",
}


@dataclass
class NotificationResult:
    success: bool
    error: str | None = None


class NotificationService:
    """Formats HTML + plain-text emails and dispatches each through one provider call.

    Never raises for delivery problems: every outcome is a ``NotificationResult``
    so callers can log it and carry on. No retry.
    """

    def __init__(
        self,
        email_provider: EmailProvider,
        *,
        saas_domain: str,
        dashboard_url: str,
        support_email: str,
        sender_name: str = "WOW Sites",
        templates: Environment | None = None,
    ):
        self._provider = email_provider
        self._saas_domain = saas_domain
        self._dashboard_url = dashboard_url
        self._support_email = support_email
        self._sender_name = sender_name
        self._templates = templates or get_jinja_env()

    async def send_welcome(
        self, email: str, subdomain: str, business_name: str
    ) -> NotificationResult:
        """Tell the owner their site is live."""
        context = {
            **_SUCCESS_COLORS,
            "business_name": business_name,
            "website_url": site_url(subdomain, self._saas_domain),
        }
        return await self._send(email, "Your website is live! 🎉", "welcome", context)

    async def send_failure(
        self, email: str, business_name: str, error_text: str
    ) -> NotificationResult:
        """Tell the owner their deployment failed, with the reported reason."""
        context = {
            **_FAILURE_COLORS,
            "business_name": business_name,
            "error_text": error_text,
        }
        return await self._send(
            email, "Issue with your website deployment", "failure", context
        )

    async def send_contact_inquiry(
        self,
        email: str,
        subdomain: str,
        business_name: str,
        inquiry: ContactInquiry,
    ) -> NotificationResult:
        """Forward a visitor's contact-form message to the business owner."""
        context = {
            **_SUCCESS_COLORS,
            "business_name": business_name,
            "website_url": site_url(subdomain, self._saas_domain),
            "inquiry": inquiry,
        }
        return await self._send(
            email,
            f"New inquiry from {inquiry.name}",
            "contact_inquiry",
            context,
            reply_to=inquiry.email,
        )

    # ── Internal ─────────────────────────────────────────────────────

    async def _send(
        self,
        to: str,
        subject: str,
        template: str,
        context: dict[str, Any],
        *,
        reply_to: str | None = None,
    ) -> NotificationResult:
        if not self._provider.is_configured:
            logger.warning(
                "%s API key not configured, skipping %s email",
                self._provider.provider_name,
                template,
            )
            return NotificationResult(success=False, error=NOT_CONFIGURED)

        html, text = self._render(template, context)
        message = OutgoingEmail(
            to=to,
            subject=subject,
            html_content=html,
            text_content=text,
            reply_to=reply_to,
        )
        try:
            await self._provider.send(message)
        except UpstreamServiceError as exc:
            logger.error("Failed to send %s email to %s: %s", template, to, exc)
            return NotificationResult(success=False, error=exc.message)

        logger.info("%s email sent to %s", template.replace("_", " ").capitalize(), to)
        return NotificationResult(success=True)

    def _render(self, template: str, context: dict[str, Any]) -> tuple[str, str]:
        full_context = {
            **context,
            "dashboard_url": self._dashboard_url,
            "support_email": self._support_email,
            "sender_name": self._sender_name,
            "year": datetime.now(timezone.utc).year,
        }
        html = self._templates.get_template(f"email/{template}.html").render(full_context)
        text = self._templates.get_template(f"email/{template}.txt").render(full_context)
        return html, text
