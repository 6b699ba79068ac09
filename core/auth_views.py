"""
Authentication views.

Registration and login hand out simplejwt access/refresh pairs.  Login also
sets the access token as an httpOnly cookie so browser clients can skip the
Authorization header (see ``core.authentication``).  These views live apart
from the authentication class to avoid circular imports when DRF initialises
``DEFAULT_AUTHENTICATION_CLASSES``.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth import authenticate
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.tokens import RefreshToken

from core.exceptions import CareError
from core.serializers.auth import LoginSerializer, RegisterSerializer
from core.services.audit import log_action
from core.services.users import format_user, issue_tokens, register_user
from core.throttling import LoginThrottle, RegisterThrottle

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([RegisterThrottle])
def register_view(request):
    s = RegisterSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    user = register_user(
        email=vd['email'],
        password=vd['password'],
        first_name=vd['firstName'],
        last_name=vd['lastName'],
        child_birth_date=vd.get('childBirthDate'),
    )
    return Response({'ok': True, **issue_tokens(user)}, status=201)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([LoginThrottle])
def login_view(request):
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    email = s.validated_data['email']

    # username mirrors email, so the stock ModelBackend applies
    user = authenticate(request, username=email, password=s.validated_data['password'])
    if not user:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'email': email, 'ip': request.META.get('REMOTE_ADDR')})
        logger.info('Failed login for %s', email)
        raise CareError('Invalid Credentials', code='invalid_credentials')

    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    tokens = issue_tokens(user)
    resp = Response({'ok': True, **tokens, 'user': format_user(user)}, status=200)
    resp.set_cookie(
        settings.AUTH_COOKIE_NAME,
        tokens['token'],
        max_age=settings.TOKEN_LIFETIME_DAYS * 24 * 3600,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite='Strict',
    )
    return resp


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user_view(request):
    return Response({'ok': True, 'user': format_user(request.user)})


@api_view(['POST'])
@permission_classes([AllowAny])
def refresh_view(request):
    """Return a new access token from a refresh token."""
    s = TokenRefreshSerializer(data=request.data)
    try:
        s.is_valid(raise_exception=True)
    except TokenError as e:
        raise CareError(str(e), code='token_invalid') from None
    data = dict(s.validated_data)
    out = {'ok': True, 'token': data['access']}
    if 'refresh' in data:
        out['refresh'] = data['refresh']
    return Response(out)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    """Clear the auth cookie and blacklist the given refresh token, if any."""
    refresh = request.data.get('refresh')
    blacklisted = False
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            blacklisted = True
        except TokenError:
            # Already expired or blacklisted; logging out still succeeds.
            logger.info('Logout with unusable refresh token')
    user = request.user if getattr(request.user, 'is_authenticated', False) else None
    if user is not None:
        log_action(user=user, action='logout', object_type='user', object_id=user.id)
    resp = Response({'ok': True, 'msg': 'Logged out successfully', 'blacklisted': blacklisted})
    resp.delete_cookie(settings.AUTH_COOKIE_NAME, samesite='Strict')
    return resp
