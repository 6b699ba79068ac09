"""
API tests for consultation booking.

Covers the overlap rule against a professional's scheduled bookings,
rescheduling with self-exclusion, participant-only access and the blanket
past-record guard on deletion.
"""
from datetime import timedelta

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.models import AuditEvent, Consultation, User
from core.services.consult import check_consultation_conflict
from core.services.scheduling import Conflict, TimeWindow


class ConsultationAPITests(APITestCase):
    def setUp(self) -> None:
        self.patient = User.objects.create_user(
            username='mia@example.com', email='mia@example.com', password='secret1',
            first_name='Mia', last_name='Lee', role=User.ROLE_PATIENT,
        )
        self.other_patient = User.objects.create_user(
            username='ana@example.com', email='ana@example.com', password='secret1', role=User.ROLE_PATIENT,
        )
        self.pro = User.objects.create_user(
            username='dr.kay@example.com', email='dr.kay@example.com', password='secret1',
            first_name='Kay', last_name='Ng', role=User.ROLE_PROFESSIONAL,
        )
        self.admin = User.objects.create_user(
            username='root@example.com', email='root@example.com', password='secret1', role=User.ROLE_ADMIN,
        )
        tomorrow = timezone.now() + timedelta(days=1)
        self.t10 = tomorrow.replace(hour=10, minute=0, second=0, microsecond=0)

    def authenticate(self, user: User) -> APIClient:
        """Return an authenticated APIClient for the given user."""
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def book(self, client, start, duration=30, professional=None):
        return client.post('/api/consultations', {
            'professional': (professional or self.pro).id,
            'date': start.isoformat(),
            'duration': duration,
            'topic': 'Sleep schedule',
            'notes': 'Baby wakes hourly',
        }, format='json')

    def test_booking_creates_scheduled_consultation_with_meeting_link(self):
        r = self.book(self.authenticate(self.patient), self.t10)
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)
        data = r.data['data']
        self.assertEqual(data['status'], 'scheduled')
        self.assertEqual(data['professional']['lastName'], 'Ng')
        self.assertTrue(data['meetingLink'].startswith('https://'))
        self.assertTrue(AuditEvent.objects.filter(action='consult_book', object_id=data['id']).exists())

    def test_overlapping_booking_is_rejected(self):
        client = self.authenticate(self.patient)
        self.assertEqual(self.book(client, self.t10).status_code, status.HTTP_201_CREATED)
        r = self.book(self.authenticate(self.other_patient), self.t10 + timedelta(minutes=15))
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['ok'], False)
        self.assertEqual(r.data['error']['code'], 'slot_unavailable')
        self.assertEqual(Consultation.objects.count(), 1)

    def test_back_to_back_booking_is_allowed(self):
        client = self.authenticate(self.patient)
        self.assertEqual(self.book(client, self.t10).status_code, status.HTTP_201_CREATED)
        r = self.book(client, self.t10 + timedelta(minutes=30))
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)

    def test_canceled_bookings_do_not_block_the_slot(self):
        Consultation.objects.create(
            requester=self.other_patient, professional=self.pro, date=self.t10, duration=60,
            topic='x', status=Consultation.STATUS_CANCELED,
        )
        r = self.book(self.authenticate(self.patient), self.t10)
        self.assertEqual(r.status_code, status.HTTP_201_CREATED)

    def test_booking_with_non_professional_is_rejected(self):
        r = self.book(self.authenticate(self.patient), self.t10, professional=self.other_patient)
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['error']['code'], 'invalid_professional')

    def test_zero_duration_is_a_validation_error(self):
        r = self.book(self.authenticate(self.patient), self.t10, duration=0)
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Consultation.objects.count(), 0)

    def test_conflict_check_excludes_own_id(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        window = TimeWindow.of(self.t10, 30)
        self.assertIs(check_consultation_conflict(self.pro, window), Conflict.CONFLICT)
        self.assertIs(check_consultation_conflict(self.pro, window, exclude_id=c.id), Conflict.NO_CONFLICT)

    def test_reschedule_to_own_window_succeeds(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        r = self.authenticate(self.patient).put(f'/api/consultations/{c.id}', {
            'date': self.t10.isoformat(), 'duration': 30,
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['data']['status'], 'rescheduled')

    def test_reschedule_into_taken_slot_leaves_record_unchanged(self):
        mine = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        Consultation.objects.create(
            requester=self.other_patient, professional=self.pro,
            date=self.t10 + timedelta(hours=1), duration=30, topic='y',
        )
        r = self.authenticate(self.patient).put(f'/api/consultations/{mine.id}', {
            'date': (self.t10 + timedelta(minutes=50)).isoformat(), 'topic': 'changed',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['error']['code'], 'slot_unavailable')
        mine.refresh_from_db()
        self.assertEqual(mine.date, self.t10)
        self.assertEqual(mine.topic, 'x')
        self.assertEqual(mine.status, Consultation.STATUS_SCHEDULED)

    def test_plain_update_keeps_window(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        r = self.authenticate(self.pro).put(f'/api/consultations/{c.id}', {
            'status': 'completed', 'notes': 'Follow up in 2 weeks',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        c.refresh_from_db()
        self.assertEqual(c.status, Consultation.STATUS_COMPLETED)
        self.assertEqual(c.notes, 'Follow up in 2 weeks')
        self.assertEqual(c.date, self.t10)

    def test_restoring_scheduled_status_respects_overlap(self):
        canceled = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30,
            topic='x', status=Consultation.STATUS_CANCELED,
        )
        self.assertEqual(self.book(self.authenticate(self.other_patient), self.t10).status_code,
                         status.HTTP_201_CREATED)
        r = self.authenticate(self.patient).put(f'/api/consultations/{canceled.id}', {
            'status': 'scheduled', 'notes': 'changed',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(r.data['error']['code'], 'slot_unavailable')
        canceled.refresh_from_db()
        self.assertEqual(canceled.status, Consultation.STATUS_CANCELED)
        self.assertEqual(canceled.notes, '')
        self.assertEqual(
            Consultation.objects.filter(professional=self.pro, status=Consultation.STATUS_SCHEDULED).count(), 1)

    def test_restoring_scheduled_status_into_free_slot(self):
        canceled = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30,
            topic='x', status=Consultation.STATUS_CANCELED,
        )
        r = self.authenticate(self.patient).put(f'/api/consultations/{canceled.id}', {
            'status': 'scheduled',
        }, format='json')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertEqual(r.data['data']['status'], 'scheduled')

    def test_non_participant_gets_403_not_404(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        client = self.authenticate(self.other_patient)
        self.assertEqual(client.get(f'/api/consultations/{c.id}').status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(client.delete(f'/api/consultations/{c.id}').status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Consultation.objects.filter(id=c.id).exists())

    def test_missing_consultation_is_404(self):
        r = self.authenticate(self.admin).get('/api/consultations/999999')
        self.assertEqual(r.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(r.data['error']['code'], 'not_found')

    def test_admin_can_view_any_consultation(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        r = self.authenticate(self.admin).get(f'/api/consultations/{c.id}')
        self.assertEqual(r.status_code, status.HTTP_200_OK)

    def test_past_consultation_cannot_be_deleted_even_by_admin(self):
        past = Consultation.objects.create(
            requester=self.patient, professional=self.pro,
            date=timezone.now() - timedelta(days=2), duration=30, topic='x',
        )
        for user in (self.patient, self.admin):
            r = self.authenticate(user).delete(f'/api/consultations/{past.id}')
            self.assertEqual(r.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(r.data['error']['code'], 'past_record')
        self.assertTrue(Consultation.objects.filter(id=past.id).exists())

    def test_future_consultation_can_be_deleted_by_requester(self):
        c = Consultation.objects.create(
            requester=self.patient, professional=self.pro, date=self.t10, duration=30, topic='x',
        )
        r = self.authenticate(self.patient).delete(f'/api/consultations/{c.id}')
        self.assertEqual(r.status_code, status.HTTP_200_OK)
        self.assertFalse(Consultation.objects.filter(id=c.id).exists())

    def test_lists(self):
        Consultation.objects.create(requester=self.patient, professional=self.pro,
                                    date=self.t10 + timedelta(hours=2), duration=30, topic='later')
        Consultation.objects.create(requester=self.patient, professional=self.pro,
                                    date=self.t10, duration=30, topic='sooner')
        r = self.authenticate(self.patient).get('/api/consultations')
        self.assertEqual([c['topic'] for c in r.data['data']], ['sooner', 'later'])

        r = self.authenticate(self.pro).get('/api/consultations/professional')
        self.assertEqual(len(r.data['data']), 2)
        r = self.authenticate(self.patient).get('/api/consultations/professional')
        self.assertEqual(r.status_code, status.HTTP_403_FORBIDDEN)

        r = self.authenticate(self.patient).get('/api/consultations/professionals/list')
        self.assertEqual(r.data['data'], [{'id': self.pro.id, 'firstName': 'Kay', 'lastName': 'Ng'}])

    def test_anonymous_is_rejected(self):
        r = APIClient().get('/api/consultations')
        self.assertEqual(r.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(r.data['ok'], False)
