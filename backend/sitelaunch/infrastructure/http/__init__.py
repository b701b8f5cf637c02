from .site_api_client import HttpSiteApiClient

__all__ = ["HttpSiteApiClient"]
