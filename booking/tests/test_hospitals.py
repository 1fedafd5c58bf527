import pytest
from django.db import DatabaseError
from rest_framework.test import APIClient

from booking.models import Doctor, Hospital
from booking.services.hospitals import hospital_directory

pytestmark = pytest.mark.django_db


def make_hospital(name):
    return Hospital.objects.create(
        name=name, address='1 Main Road', consultation_fee='₹500', rating='4.5',
        wait_time='15 mins', contact='+91 1', beds=12, latitude=22.5, longitude=88.3,
        specialities=['Cardiology'], amenities=['Parking'], verified=True,
    )


def test_directory_lists_hospitals_with_doctors():
    h = make_hospital('City General')
    Doctor.objects.create(hospital=h, name='Dr. Sen', specialty='Cardiology', experience='10 years')
    r = APIClient().get('/api/hospital')
    assert r.status_code == 200
    assert r['Access-Control-Allow-Origin'] == '*'
    assert r['Access-Control-Allow-Methods'] == 'GET, OPTIONS'
    [item] = r.data
    assert item['name'] == 'City General'
    assert item['consultationFee'] == '₹500'
    assert item['waitTime'] == '15 mins'
    assert item['specialities'] == ['Cardiology']
    assert isinstance(item['nextAvailable'], str)
    assert item['doctors'] == [
        {'id': h.doctors.get().id, 'name': 'Dr. Sen', 'specialty': 'Cardiology',
         'experience': '10 years', 'hospitalId': h.id},
    ]


def test_directory_is_public_even_with_bad_credentials():
    make_hospital('City General')
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION='Bearer not-a-token')
    assert client.get('/api/hospital').status_code == 200


def test_preflight():
    r = APIClient().options('/api/hospital')
    assert r.status_code == 204
    assert r['Access-Control-Allow-Origin'] == '*'
    assert r['Access-Control-Allow-Methods'] == 'GET, OPTIONS'
    assert r['Access-Control-Allow-Headers'] == 'Content-Type'


def test_directory_is_cached_until_refreshed():
    make_hospital('First')
    client = APIClient()
    assert len(client.get('/api/hospital').data) == 1
    make_hospital('Second')
    assert len(client.get('/api/hospital').data) == 1
    assert len(hospital_directory(refresh=True)) == 2
    assert len(client.get('/api/hospital').data) == 2


def test_directory_failure(monkeypatch):
    def boom(**kwargs):
        raise DatabaseError('connection lost')

    monkeypatch.setattr('booking.views.hospitals.hospital_directory', boom)
    r = APIClient().get('/api/hospital')
    assert r.status_code == 500
    assert r.data == {'message': 'Failed to fetch hospitals'}


def test_healthz():
    r = APIClient().get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True, 'cache': True}
