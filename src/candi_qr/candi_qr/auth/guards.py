from __future__ import annotations

from typing import Optional, Sequence

from flask import Flask, g, request

from ..core.exceptions import TokenMissingError
from .policies import ROUTE_POLICIES, RouteRule, resolve_policy

PUBLIC_API_PATHS = frozenset({"/api/auth/login"})


def bearer_token(header: Optional[str]) -> Optional[str]:
    """Extract <token> from 'Bearer <token>'."""
    if not header:
        return None
    parts = header.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def install_request_guard(app: Flask, auth_service, *, rules: Sequence[RouteRule] = ROUTE_POLICIES) -> None:
    """Authenticate every /api/* request, then apply the role policy table.

    Raised errors flow into the app error handlers, so each failure keeps its
    own status code and message.
    """

    @app.before_request
    def _guard_api():
        path = request.path
        if not path.startswith("/api/") or path in PUBLIC_API_PATHS:
            return None
        if request.method == "OPTIONS":
            return None

        token = bearer_token(request.headers.get("Authorization"))
        if not token:
            raise TokenMissingError("Access token diperlukan")

        user = auth_service.authenticate_token(token)
        g.current_user = user

        policy = resolve_policy(request.method, path, rules)
        if policy is not None:
            policy.check(user.role)
        return None
