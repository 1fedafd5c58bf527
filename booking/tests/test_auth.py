import pytest
from rest_framework.test import APIClient

from booking.models import AuditEvent, Hospital, User

pytestmark = pytest.mark.django_db


@pytest.fixture
def account():
    hospital = Hospital.objects.create(name='City General', latitude=22.5, longitude=88.3)
    return User.objects.create_user(
        username='citygeneral', email='desk@citygeneral.test', password='P@ssw0rd1',
        hospital=hospital, license_number='LIC-42',
    )


def login(client, **body):
    return client.post('/api/auth/login', body, format='json')


def test_login_opens_session_and_returns_jwt(account):
    client = APIClient()
    r = login(client, email='Desk@CityGeneral.test', password='P@ssw0rd1', licenseNumber='LIC-42')
    assert r.status_code == 200
    assert r.data['jwt_access'] and r.data['jwt_refresh']
    assert r.data['user']['hospitalId'] == account.hospital_id

    s = client.get('/api/auth/session')
    assert s.status_code == 200
    assert s.data['user'] == {'id': account.id, 'email': account.email, 'hospitalId': account.hospital_id}
    assert AuditEvent.objects.filter(action='login', user=account, detail__result='ok').exists()


def test_bearer_token_authenticates(account):
    r = login(APIClient(), email=account.email, password='P@ssw0rd1', licenseNumber='LIC-42')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    resp = client.get(f'/api/hospital/{account.hospital_id}/appointments')
    assert resp.status_code == 200
    assert resp.data == []


def test_wrong_password(account):
    r = login(APIClient(), email=account.email, password='nope', licenseNumber='LIC-42')
    assert r.status_code == 400
    assert r.data == {'error': 'Invalid credentials'}
    assert AuditEvent.objects.filter(action='login', user=None, detail__result='fail').exists()


def test_wrong_license_number(account):
    r = login(APIClient(), email=account.email, password='P@ssw0rd1', licenseNumber='LIC-1')
    assert r.status_code == 400


def test_unknown_email(account):
    r = login(APIClient(), email='nobody@example.com', password='P@ssw0rd1')
    assert r.status_code == 400


def test_account_without_hospital_cannot_sign_in():
    User.objects.create_user(username='ops', email='ops@carelink.test', password='P@ssw0rd1', role='staff')
    r = login(APIClient(), email='ops@carelink.test', password='P@ssw0rd1')
    assert r.status_code == 400


def test_malformed_login_body():
    r = login(APIClient(), email='not-an-email')
    assert r.status_code == 400
    assert r.data['error'] == 'Invalid request data'
    assert 'password' in r.data['details']


def test_session_requires_authentication():
    r = APIClient().get('/api/auth/session')
    assert r.status_code == 401
    assert r.data == {'error': 'Unauthorized'}


def test_logout_ends_session_and_blacklists_refresh(account):
    client = APIClient()
    r = login(client, email=account.email, password='P@ssw0rd1', licenseNumber='LIC-42')
    refresh = r.data['jwt_refresh']

    out = client.post('/api/auth/logout', {'refresh': refresh}, format='json')
    assert out.status_code == 200
    assert out.data == {'ok': True, 'blacklisted': 1}
    assert client.get('/api/auth/session').status_code == 401

    again = APIClient().post('/api/auth/refresh', {'refresh': refresh}, format='json')
    assert again.status_code == 401


def test_refresh_returns_new_access(account):
    r = login(APIClient(), email=account.email, password='P@ssw0rd1', licenseNumber='LIC-42')
    resp = APIClient().post('/api/auth/refresh', {'refresh': r.data['jwt_refresh']}, format='json')
    assert resp.status_code == 200
    assert resp.data['jwt_access']
