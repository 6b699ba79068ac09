"""
JWT authentication that also understands the login cookie.

Browsers that logged in through ``/api/auth/login`` carry the access token
in an httpOnly cookie; API clients send ``Authorization: Bearer <token>``.
The header wins when both are present.  A bad header is a 401, while a
stale or garbled cookie is treated as no credentials so public endpoints
keep serving.
"""
from __future__ import annotations

import logging

from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class JWTCookieAuthentication(JWTAuthentication):

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            return super().authenticate(request)
        raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not raw_token:
            return None
        try:
            validated_token = self.get_validated_token(raw_token)
        except InvalidToken:
            logger.debug('Ignoring invalid %s cookie', settings.AUTH_COOKIE_NAME)
            return None
        return self.get_user(validated_token), validated_token
