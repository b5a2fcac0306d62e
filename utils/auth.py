import hmac
import logging
from typing import Optional
from fastapi import Request

from utils.errors import UnauthorizedError


class BearerTokenAuthorizer:
    """
    Grants admin access to requests carrying `Authorization: Bearer <ADMIN_API_KEY>`.
    With no key configured every admin check is denied.
    """

    def __init__(self, admin_api_key: Optional[str]):
        self.admin_api_key = admin_api_key
        if not admin_api_key:
            logging.warning("ADMIN_API_KEY not set. Admin routes will reject every request.")

    async def ensure_admin(self, request: Request) -> bool:
        if not self.admin_api_key:
            return False

        scheme, _, token = request.headers.get("Authorization", "").partition(" ")
        if scheme.lower() != "bearer" or not token:
            return False

        return hmac.compare_digest(token.strip().encode(), self.admin_api_key.encode())


async def ensure_admin(request: Request) -> None:
    """Route dependency: deny before the handler runs or the body is read"""
    authorizer = request.app.state.authorizer
    if not await authorizer.ensure_admin(request):
        raise UnauthorizedError()
