from abc import ABC, abstractmethod


class AuthProvider(ABC):
    """
    Abstract sign-in account provider.

    Contract:
    - create_account() returns the new account's UID.
    - Provider refusals (email in use, invalid email, weak password, unknown
      email) MUST be raised as app.core.exceptions.AccountError with a
      user-facing message; anything else propagates unchanged.
    """

    @abstractmethod
    def create_account(self, email: str, password: str, display_name: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def send_password_reset(self, email: str) -> str:
        """Start a password reset. Returns the reset link."""
        raise NotImplementedError
