import logging

from firebase_admin import auth

from app.config.firebase import initialize_firebase_app
from app.core.exceptions import AccountError
from .base import AuthProvider

logger = logging.getLogger(__name__)


class FirebaseAuthProvider(AuthProvider):
    """Email/password accounts in Firebase Authentication (Admin SDK)."""

    def __init__(self):
        initialize_firebase_app()

    def create_account(self, email: str, password: str, display_name: str) -> str:
        try:
            record = auth.create_user(email=email, password=password, display_name=display_name)
        except auth.EmailAlreadyExistsError:
            raise AccountError("This email is already registered")
        except ValueError as e:
            # The Admin SDK validates email format and password length client-side
            message = str(e).lower()
            if "email" in message:
                raise AccountError("Invalid email address")
            if "password" in message:
                raise AccountError("Password is too weak")
            raise
        logger.info(f"Firebase Auth account created: {record.uid}")
        return record.uid

    def send_password_reset(self, email: str) -> str:
        # The Admin SDK only generates the link; delivery is up to the caller
        try:
            return auth.generate_password_reset_link(email)
        except auth.UserNotFoundError:
            raise AccountError("No account exists for this email")
