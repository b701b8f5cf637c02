from .brevo_email_provider import BrevoEmailProvider

__all__ = ["BrevoEmailProvider"]
