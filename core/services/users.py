import logging
from typing import Optional

from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import RefreshToken

from core.exceptions import CareError
from core.models import User
from core.services.audit import log_action

logger = logging.getLogger(__name__)


class UserExists(CareError):
    default_detail = 'User already exists'
    default_code = 'user_exists'


def format_user(u: User) -> dict:
    return {
        'id': u.id,
        'firstName': u.first_name,
        'lastName': u.last_name,
        'email': u.email,
        'role': u.role,
        'childBirthDate': u.child_birth_date.isoformat() if u.child_birth_date else None,
        'profileComplete': u.profile_complete,
        'dateJoined': u.date_joined.isoformat() if u.date_joined else None,
    }


def issue_tokens(user: User) -> dict:
    """Return a fresh access/refresh pair carrying the user's role."""
    refresh = RefreshToken.for_user(user)
    refresh['role'] = user.role
    return {'token': str(refresh.access_token), 'refresh': str(refresh)}


def register_user(*, email: str, password: str, first_name: str, last_name: str,
                  child_birth_date=None, role: Optional[str]=None) -> User:
    if User.objects.filter(email__iexact=email).exists():
        raise UserExists()
    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                child_birth_date=child_birth_date,
                role=role or User.ROLE_PATIENT,
            )
            log_action(user=user, action='register', object_type='user', object_id=user.id)
    except IntegrityError:
        # Lost a race against a concurrent registration of the same email.
        raise UserExists() from None
    logger.info('Registered user %s (%s)', user.id, user.role)
    return user
