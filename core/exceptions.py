"""
Business-rule errors and the project-wide DRF exception handler.

Services raise the exceptions below; views let them propagate and the
handler renders every failure as ``{'ok': False, 'error': {...}}``.
"""
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class CareError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Request rejected'
    default_code = 'rejected'


class InvalidWindow(CareError):
    default_detail = 'Start time and a positive duration are required'
    default_code = 'invalid_window'


class SlotUnavailable(CareError):
    default_detail = 'This time slot is not available'
    default_code = 'slot_unavailable'


class InvalidProfessional(CareError):
    default_detail = 'Invalid professional selected'
    default_code = 'invalid_professional'


class PastRecord(CareError):
    default_detail = 'Cannot modify records in the past'
    default_code = 'past_record'


class WebinarInPast(CareError):
    default_detail = 'This webinar has already taken place'
    default_code = 'webinar_in_past'


class WebinarFull(CareError):
    default_detail = 'Webinar is at full capacity'
    default_code = 'webinar_full'


class AlreadyRegistered(CareError):
    default_detail = 'Already registered for this webinar'
    default_code = 'already_registered'


class NotRegistered(CareError):
    default_detail = 'Not registered for this webinar'
    default_code = 'not_registered'


class NoValidSymptoms(CareError):
    default_detail = 'Invalid symptoms provided'
    default_code = 'no_valid_symptoms'


class AlreadySeeded(CareError):
    default_detail = 'Symptoms already seeded'
    default_code = 'already_seeded'


class NotAuthorized(CareError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Not authorized'
    default_code = 'not_authorized'


class NotFound(CareError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.exception('Unhandled error on %s', getattr(request, 'path', '?'))
        message = str(exc) if settings.DEBUG else 'Server Error'
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': message}}, status=500)
    codes = exc.get_codes() if isinstance(exc, APIException) else None
    code = codes if isinstance(codes, str) else 'invalid'
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    headers = {h: resp[h] for h in ('WWW-Authenticate', 'Retry-After') if resp.has_header(h)}
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code, headers=headers)
