import logging
from typing import Optional

from .base import AuthProvider

logger = logging.getLogger(__name__)

_provider_instance: Optional[AuthProvider] = None


def get_auth_provider() -> AuthProvider:
    """
    Resolve the active account provider.

    Firebase Authentication is the only production provider; tests pass
    their own AuthProvider to AdminService instead.
    """
    global _provider_instance
    if _provider_instance is not None:
        return _provider_instance

    from .firebase_provider import FirebaseAuthProvider

    _provider_instance = FirebaseAuthProvider()
    logger.info("Auth provider initialized: firebase")
    return _provider_instance
