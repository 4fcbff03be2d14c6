"""
Account provider used to onboard department users.
"""

from app.services.auth_provider.base import AuthProvider
from app.services.auth_provider.resolver import get_auth_provider

__all__ = ["AuthProvider", "get_auth_provider"]
