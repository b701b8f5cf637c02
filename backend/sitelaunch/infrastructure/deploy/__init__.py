from .workflow_webhook_client import WorkflowWebhookClient

__all__ = ["WorkflowWebhookClient"]
