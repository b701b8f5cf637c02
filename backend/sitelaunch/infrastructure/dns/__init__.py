from .cloudflare_dns_client import CloudflareDnsClient

__all__ = ["CloudflareDnsClient"]
