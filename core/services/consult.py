import logging
import secrets
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.exceptions import InvalidProfessional, NotAuthorized, NotFound, PastRecord, SlotUnavailable
from core.models import Consultation, User
from core.services.audit import log_action
from core.services.scheduling import Conflict, TimeWindow, first_overlap

logger = logging.getLogger(__name__)


def _person(user: Optional[User]) -> Optional[dict]:
    if user is None:
        return None
    return {'id': user.id, 'firstName': user.first_name, 'lastName': user.last_name}


def format_consultation(c: Consultation) -> dict:
    return {
        'id': c.id,
        'requester': _person(c.requester),
        'professional': _person(c.professional),
        'date': c.date.isoformat(),
        'end': c.end.isoformat(),
        'duration': c.duration,
        'topic': c.topic,
        'notes': c.notes,
        'concerns': c.concerns,
        'status': c.status,
        'meetingLink': c.meeting_link,
        'createdAt': c.created_at.isoformat() if c.created_at else None,
    }


def check_consult_access(user: User, consult: Consultation) -> bool:
    if getattr(user, 'role', '') == User.ROLE_ADMIN:
        return True
    return user.id in (consult.requester_id, consult.professional_id)


def ensure_consult_access(user: User, consult: Consultation) -> None:
    if not check_consult_access(user, consult):
        raise NotAuthorized()


def get_consultation(consult_id) -> Consultation:
    c = Consultation.objects.select_related('requester', 'professional').filter(id=consult_id).first()
    if not c:
        raise NotFound('Consultation not found')
    return c


def _scheduled_windows(professional_id: int, window: TimeWindow, exclude_id: Optional[int]):
    # Only bookings starting before the proposed end can overlap it.
    qs = Consultation.objects.filter(
        professional_id=professional_id,
        status=Consultation.STATUS_SCHEDULED,
        date__lt=window.end,
    )
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return ((c, TimeWindow(c.date, c.duration)) for c in qs.only('id', 'date', 'duration'))


def check_consultation_conflict(professional: User, window: TimeWindow, exclude_id: Optional[int]=None) -> Conflict:
    """Decide whether ``window`` collides with the professional's scheduled bookings."""
    clash = first_overlap(window, _scheduled_windows(professional.id, window, exclude_id))
    if clash is not None:
        logger.info('Window %s+%smin clashes with consultation %s', window.start.isoformat(), window.duration_minutes, clash.id)
        return Conflict.CONFLICT
    return Conflict.NO_CONFLICT


def _meeting_link() -> str:
    return f"{settings.MEETING_LINK_BASE}/{secrets.token_urlsafe(16)}"


@transaction.atomic
def book_consultation(requester: User, professional_id, window: TimeWindow, topic: str,
                      notes: str='', concerns: str='') -> Consultation:
    # Row lock serializes concurrent bookings against the same professional.
    professional = User.objects.select_for_update().filter(id=professional_id).first()
    if not professional or professional.role != User.ROLE_PROFESSIONAL:
        raise InvalidProfessional()

    if check_consultation_conflict(professional, window) is Conflict.CONFLICT:
        raise SlotUnavailable()

    consult = Consultation.objects.create(
        requester=requester,
        professional=professional,
        date=window.start,
        duration=window.duration_minutes,
        topic=topic,
        notes=notes or '',
        concerns=concerns or '',
        meeting_link=_meeting_link(),
    )
    log_action(user=requester, action='consult_book', object_type='consultation', object_id=consult.id,
               detail={'professionalId': professional.id, 'date': window.start.isoformat()})
    logger.info('Consultation %s booked with professional %s', consult.id, professional.id)
    return consult


@transaction.atomic
def reschedule_consultation(consult: Consultation, window: TimeWindow, actor: User) -> Consultation:
    ensure_consult_access(actor, consult)
    User.objects.select_for_update().filter(id=consult.professional_id).first()

    if check_consultation_conflict(consult.professional, window, exclude_id=consult.id) is Conflict.CONFLICT:
        raise SlotUnavailable()

    previous = consult.date
    consult.date = window.start
    consult.duration = window.duration_minutes
    consult.status = Consultation.STATUS_RESCHEDULED
    consult.save(update_fields=['date', 'duration', 'status'])
    log_action(user=actor, action='consult_reschedule', object_type='consultation', object_id=consult.id,
               detail={'from': previous.isoformat(), 'to': window.start.isoformat()})
    logger.info('Consultation %s rescheduled to %s', consult.id, window.start.isoformat())
    return consult


def update_consultation(consult: Consultation, actor: User, *, date=None, duration=None,
                        topic=None, notes=None, concerns=None, status=None) -> Consultation:
    """Apply a partial update.

    A new date or duration is a reschedule and sets the status itself, so an
    explicit ``status`` is only honoured when the window stays put.
    """
    ensure_consult_access(actor, consult)
    with transaction.atomic():
        if date is not None or duration is not None:
            window = TimeWindow.of(
                date if date is not None else consult.date,
                duration if duration is not None else consult.duration,
            )
            reschedule_consultation(consult, window, actor)
        elif status is not None:
            if status == Consultation.STATUS_SCHEDULED and consult.status != Consultation.STATUS_SCHEDULED:
                # Re-entering the scheduled set must not overlap another booking.
                User.objects.select_for_update().filter(id=consult.professional_id).first()
                window = TimeWindow(consult.date, consult.duration)
                if check_consultation_conflict(consult.professional, window, exclude_id=consult.id) is Conflict.CONFLICT:
                    raise SlotUnavailable()
            consult.status = status
        for field, value in (('topic', topic), ('notes', notes), ('concerns', concerns)):
            if value is not None:
                setattr(consult, field, value)
        consult.save()
    return consult


@transaction.atomic
def delete_consultation(consult: Consultation, actor: User, now=None) -> None:
    ensure_consult_access(actor, consult)
    now = now or timezone.now()
    # Applies to admins too.
    if consult.date < now:
        raise PastRecord('Cannot delete past consultations')
    log_action(user=actor, action='consult_delete', object_type='consultation', object_id=consult.id,
               detail={'date': consult.date.isoformat()})
    consult.delete()


def list_for_requester(user: User) -> list[dict]:
    qs = Consultation.objects.filter(requester=user).select_related('requester', 'professional').order_by('date')
    return [format_consultation(c) for c in qs]


def list_for_professional(user: User) -> list[dict]:
    qs = Consultation.objects.filter(professional=user).select_related('requester', 'professional').order_by('date')
    return [format_consultation(c) for c in qs]


def list_professionals() -> list[dict]:
    qs = User.objects.filter(role=User.ROLE_PROFESSIONAL, is_active=True).only('id', 'first_name', 'last_name').order_by('last_name', 'first_name')
    return [_person(u) for u in qs]
