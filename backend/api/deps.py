"""
TeePublic Connector API Dependencies

Dependency injection for credentials and the outbound HTTP client.
"""

from core.config import get_settings
from integrations.base import TeePublicCredentials
from integrations.teepublic import TeePublicClient


def get_credentials() -> TeePublicCredentials:
    """Seller portal credentials from the environment."""
    return TeePublicCredentials.from_settings(get_settings())


def get_teepublic_client() -> TeePublicClient:
    return TeePublicClient()
