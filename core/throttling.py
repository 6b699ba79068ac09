"""
Per-endpoint rate limits for the auth and symptom-check views.

Each class reads its rate from ``DEFAULT_THROTTLE_RATES`` under its scope.
Authenticated callers are keyed by user id; anonymous ones by client IP.
"""
from rest_framework.throttling import SimpleRateThrottle


class ScopedCallerThrottle(SimpleRateThrottle):

    def get_cache_key(self, request, view):
        if request.user and request.user.is_authenticated:
            ident = request.user.pk
        else:
            ident = self.get_ident(request)
        return self.cache_format % {'scope': self.scope, 'ident': ident}


class LoginThrottle(ScopedCallerThrottle):
    scope = 'login'


class RegisterThrottle(ScopedCallerThrottle):
    scope = 'register'


class SymptomCheckThrottle(ScopedCallerThrottle):
    scope = 'symptom_check'
