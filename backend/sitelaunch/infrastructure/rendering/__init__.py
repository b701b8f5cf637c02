from .site_template_generator import SiteTemplateGenerator
from .template_environment import create_jinja_env, get_jinja_env

__all__ = [
    "SiteTemplateGenerator",
    "create_jinja_env",
    "get_jinja_env",
]
