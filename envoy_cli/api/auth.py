"""Registration, login and profile endpoints."""

import structlog

from .base import BaseClient, build_body
from .models import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest

logger = structlog.get_logger(__name__)


class AuthController:
    """Session lifecycle: a successful register or login adopts the new token."""

    def __init__(self, base: BaseClient):
        self.base = base

    def register(self, name: str, email: str, password: str) -> AuthResponse:
        body = build_body(RegisterRequest, name=name, email=email, password=password)
        response = self.base.request("POST", "/auth/register", body, auth_required=False)
        auth = self.base.decode(response, AuthResponse)

        self.base.session.adopt_token(auth.token)
        logger.info("user_registered", user_id=auth.user.id)
        return auth

    def login(self, email: str, password: str) -> AuthResponse:
        body = build_body(LoginRequest, email=email, password=password)
        response = self.base.request("POST", "/auth/login", body, auth_required=False)
        auth = self.base.decode(response, AuthResponse)

        self.base.session.adopt_token(auth.token)
        logger.info("user_logged_in", user_id=auth.user.id)
        return auth

    def profile(self) -> ProfileResponse:
        response = self.base.request("GET", "/auth/profile")
        return self.base.decode(response, ProfileResponse)

    def logout(self):
        """Forget the stored token. No request is made."""
        self.base.session.clear_token()
