"""
Webinar scheduling and seat management.

Registration checks run in a fixed order (past, capacity, duplicate) so the
error a caller sees is stable when several conditions hold at once.
"""
import logging
from typing import Iterable, Optional

from django.db import transaction
from django.utils import timezone

from core.exceptions import (
    AlreadyRegistered,
    CareError,
    NotAuthorized,
    NotFound,
    NotRegistered,
    PastRecord,
    WebinarFull,
    WebinarInPast,
)
from core.models import User, Webinar, WebinarRegistration
from core.services.audit import log_action
from core.services.scheduling import TimeWindow

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'date', 'duration', 'capacity', 'tags', 'recording_url', 'is_recorded')


def format_webinar(w: Webinar, *, registrations: Optional[list]=None) -> dict:
    regs = registrations if registrations is not None else list(w.registrations.all())
    return {
        'id': w.id,
        'title': w.title,
        'description': w.description,
        'presenter': {'id': w.presenter.id, 'firstName': w.presenter.first_name, 'lastName': w.presenter.last_name},
        'date': w.date.isoformat(),
        'end': w.end.isoformat(),
        'duration': w.duration,
        'capacity': w.capacity,
        'seatsLeft': max(0, w.capacity - len(regs)),
        'registrations': [
            {'user': r.user_id, 'registeredAt': r.registered_at.isoformat(), 'attended': r.attended}
            for r in regs
        ],
        'recordingUrl': w.recording_url,
        'isRecorded': w.is_recorded,
        'tags': w.tags or [],
        'createdAt': w.created_at.isoformat() if w.created_at else None,
    }


def format_many(qs: Iterable[Webinar]) -> list[dict]:
    return [format_webinar(w) for w in qs]


def _base_qs():
    return Webinar.objects.select_related('presenter').prefetch_related('registrations')


def get_webinar(webinar_id) -> Webinar:
    w = _base_qs().filter(id=webinar_id).first()
    if not w:
        raise NotFound('Webinar not found')
    return w


def is_past(webinar: Webinar, now=None) -> bool:
    return webinar.date < (now or timezone.now())


def ensure_presenter_or_admin(user: User, webinar: Webinar) -> None:
    if webinar.presenter_id != user.id and getattr(user, 'role', '') != User.ROLE_ADMIN:
        raise NotAuthorized()


def upcoming(now=None):
    return _base_qs().filter(date__gte=now or timezone.now()).order_by('date')


def all_webinars():
    return _base_qs().order_by('-date')


def recorded():
    return _base_qs().filter(is_recorded=True).exclude(recording_url='').order_by('-date')


def with_tag(tag: str) -> list[Webinar]:
    # JSON containment lookups are not portable across backends (SQLite).
    return [w for w in _base_qs().order_by('-date') if tag in (w.tags or [])]


def registered_for(user: User):
    return _base_qs().filter(registrations__user=user).order_by('date').distinct()


def create_webinar(presenter: User, *, title: str, description: str, window: TimeWindow,
                   capacity: int, tags: Optional[list]=None) -> Webinar:
    with transaction.atomic():
        webinar = Webinar.objects.create(
            title=title,
            description=description,
            presenter=presenter,
            date=window.start,
            duration=window.duration_minutes,
            capacity=capacity,
            tags=tags or [],
        )
        log_action(user=presenter, action='webinar_create', object_type='webinar', object_id=webinar.id,
                   detail={'date': window.start.isoformat(), 'capacity': capacity})
    logger.info('Webinar %s created by %s', webinar.id, presenter.id)
    return webinar


@transaction.atomic
def update_webinar(webinar: Webinar, actor: User, **changes) -> Webinar:
    ensure_presenter_or_admin(actor, webinar)
    webinar = Webinar.objects.select_for_update().get(id=webinar.id)
    changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
    if 'date' in changes or 'duration' in changes:
        TimeWindow.of(changes.get('date', webinar.date), changes.get('duration', webinar.duration))
    if 'capacity' in changes:
        taken = webinar.registrations.count()
        if changes['capacity'] < taken:
            raise CareError(f'Capacity cannot be lower than the {taken} existing registrations')
    for field, value in changes.items():
        setattr(webinar, field, value)
    webinar.save()
    log_action(user=actor, action='webinar_update', object_type='webinar', object_id=webinar.id,
               detail={'fields': sorted(changes)})
    return get_webinar(webinar.id)


@transaction.atomic
def delete_webinar(webinar: Webinar, actor: User, now=None) -> None:
    ensure_presenter_or_admin(actor, webinar)
    if is_past(webinar, now) and webinar.registrations.exists():
        raise PastRecord('Cannot delete past webinars with registrations')
    log_action(user=actor, action='webinar_delete', object_type='webinar', object_id=webinar.id)
    webinar.delete()


@transaction.atomic
def register_for_webinar(webinar: Webinar, attendee: User, now=None) -> WebinarRegistration:
    # Locking the webinar row serializes the seat count; the unique
    # constraint on (webinar, user) backs the duplicate rule.
    webinar = Webinar.objects.select_for_update().get(id=webinar.id)
    if is_past(webinar, now):
        raise WebinarInPast('Cannot register for past webinars')
    regs = webinar.registrations
    if regs.count() >= webinar.capacity:
        raise WebinarFull()
    if regs.filter(user=attendee).exists():
        raise AlreadyRegistered()
    reg = WebinarRegistration.objects.create(webinar=webinar, user=attendee, attended=False)
    log_action(user=attendee, action='webinar_register', object_type='webinar', object_id=webinar.id)
    logger.info('User %s registered for webinar %s', attendee.id, webinar.id)
    return reg


@transaction.atomic
def cancel_webinar_registration(webinar: Webinar, attendee: User, now=None) -> None:
    webinar = Webinar.objects.select_for_update().get(id=webinar.id)
    if is_past(webinar, now):
        raise WebinarInPast('Cannot cancel registration for past webinars')
    reg = webinar.registrations.filter(user=attendee).first()
    if reg is None:
        raise NotRegistered()
    reg.delete()
    log_action(user=attendee, action='webinar_unregister', object_type='webinar', object_id=webinar.id)


@transaction.atomic
def mark_attendance(webinar: Webinar, actor: User, user_id: int, attended: bool) -> WebinarRegistration:
    ensure_presenter_or_admin(actor, webinar)
    reg = webinar.registrations.filter(user_id=user_id).first()
    if reg is None:
        raise NotRegistered('User not registered for this webinar')
    reg.attended = attended
    reg.save(update_fields=['attended'])
    log_action(user=actor, action='webinar_attendance', object_type='webinar', object_id=webinar.id,
               detail={'userId': user_id, 'attended': attended})
    return reg
