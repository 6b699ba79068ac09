import pytest
from django.core.exceptions import ImproperlyConfigured
from django.urls import reverse
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from core.models import AuditEvent, User

pytestmark = pytest.mark.django_db

REGISTER = {
    'firstName': 'Mia', 'lastName': 'Lee', 'email': 'Mia@Example.com', 'password': 'secret1',
    'childBirthDate': '2030-01-02',
}


def login(client, email, password):
    return client.post(reverse('login_view'), {'email': email, 'password': password}, format='json')


def test_register_then_login_flow():
    client = APIClient()
    r = client.post(reverse('register_view'), REGISTER, format='json')
    assert r.status_code == 201
    assert r.data['ok'] is True and r.data['token'] and r.data['refresh']
    u = User.objects.get(email='mia@example.com')
    assert u.role == User.ROLE_PATIENT
    assert u.username == u.email
    assert str(u.child_birth_date) == '2030-01-02'

    r = login(client, 'mia@example.com', 'secret1')
    assert r.status_code == 200
    assert r.data['user']['email'] == 'mia@example.com'
    assert 'password' not in r.data['user']
    assert AccessToken(r.data['token'])['role'] == 'patient'


def test_duplicate_registration_is_rejected():
    client = APIClient()
    client.post(reverse('register_view'), REGISTER, format='json')
    r = client.post(reverse('register_view'), dict(REGISTER, email='mia@example.com'), format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'User already exists'


def test_role_cannot_be_chosen_at_registration():
    client = APIClient()
    client.post(reverse('register_view'), dict(REGISTER, role='admin'), format='json')
    assert User.objects.get(email='mia@example.com').role == User.ROLE_PATIENT


def test_short_password_is_rejected():
    r = APIClient().post(reverse('register_view'), dict(REGISTER, password='12345'), format='json')
    assert r.status_code == 400
    assert 'password' in r.data['error']['message']


def test_bad_credentials():
    User.objects.create_user(username='a@example.com', email='a@example.com', password='secret1')
    r = login(APIClient(), 'a@example.com', 'wrong-pass')
    assert r.status_code == 400
    assert r.data['error'] == {'code': 'invalid_credentials', 'message': 'Invalid Credentials'}
    assert AuditEvent.objects.filter(action='login', detail__result='fail').exists()


def test_bearer_header_and_cookie_both_authenticate():
    User.objects.create_user(username='a@example.com', email='a@example.com', password='secret1',
                             role=User.ROLE_PROFESSIONAL)
    client = APIClient()
    r = login(client, 'a@example.com', 'secret1')
    assert r.cookies['token']['httponly']
    token = r.data['token']

    # the login cookie alone is enough
    me = client.get(reverse('current_user_view'))
    assert me.status_code == 200
    assert me.data['user']['role'] == 'professional'

    bearer = APIClient()
    bearer.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert bearer.get(reverse('current_user_view')).status_code == 200


def test_invalid_token_is_401():
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    assert client.get(reverse('current_user_view')).status_code == 401


def test_refresh_and_logout_blacklists_refresh_token():
    User.objects.create_user(username='a@example.com', email='a@example.com', password='secret1')
    client = APIClient()
    refresh = login(client, 'a@example.com', 'secret1').data['refresh']

    r = client.post(reverse('refresh_view'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['token']

    r = client.post(reverse('logout_view'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] is True
    assert r.cookies['token'].value == ''

    r = client.post(reverse('refresh_view'), {'refresh': refresh}, format='json')
    assert r.status_code in (400, 401)
    assert r.data['ok'] is False


def test_healthz_reports_catalog_state(client):
    r = client.get(reverse('healthz'))
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True, 'symptomsSeeded': False}


def test_settings_require_secret_key(monkeypatch):
    import importlib
    import nurturebloom.settings as live

    monkeypatch.setenv('SECRET_KEY', '')
    with pytest.raises(ImproperlyConfigured):
        importlib.reload(live)
    monkeypatch.setenv('SECRET_KEY', 'restored-for-later-tests')
    importlib.reload(live)


def test_stale_cookie_does_not_block_public_endpoints():
    client = APIClient()
    client.cookies['token'] = 'garbage.not.jwt'
    assert client.get(reverse('webinars')).status_code == 200
    assert client.get(reverse('symptom_list')).status_code == 200
    # private endpoints still see an anonymous caller
    assert client.get(reverse('current_user_view')).status_code == 401


def test_auth_views_carry_scoped_throttles():
    from core.auth_views import login_view, register_view
    from core.throttling import LoginThrottle, RegisterThrottle, SymptomCheckThrottle
    from core.views.symptoms import symptom_check

    assert login_view.cls.throttle_classes == [LoginThrottle]
    assert register_view.cls.throttle_classes == [RegisterThrottle]
    assert symptom_check.cls.throttle_classes == [SymptomCheckThrottle]


def test_login_throttle_limits_anonymous_callers_by_ip(rf):
    from django.core.cache import cache
    from core.throttling import LoginThrottle

    class OnePerMinute(LoginThrottle):
        rate = '1/min'

    cache.clear()
    first, second = rf.post('/api/auth/login'), rf.post('/api/auth/login')
    first.user = second.user = None
    assert OnePerMinute().allow_request(first, None) is True
    assert OnePerMinute().allow_request(second, None) is False
    other = rf.post('/api/auth/login', REMOTE_ADDR='10.0.0.9')
    other.user = None
    assert OnePerMinute().allow_request(other, None) is True
