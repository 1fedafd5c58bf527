from datetime import date

from django.db import IntegrityError

from booking.services.appointments import (
    db_error_code,
    is_foreign_key_violation,
    missing_location,
    parse_appointment_date,
    validate_appointment_payload,
)

VALID = {
    'patient': 'Asha Roy',
    'phone': '9876543210',
    'symptoms': 'Fever',
    'latitude': 22.57,
    'longitude': 88.36,
    'date': '2025-03-14',
    'time': '10:30 AM',
    'hospitalId': 1,
}


def test_valid_payload_has_no_violations():
    assert validate_appointment_payload(VALID) == []


def test_every_violation_is_reported():
    body = dict(VALID, patient=5, latitude='north')
    del body['hospitalId']
    assert validate_appointment_payload(body) == [
        'patient (expected string)',
        'latitude (expected number)',
        'hospitalId (expected integer)',
    ]


def test_empty_body_lists_all_fields():
    violations = validate_appointment_payload({})
    assert len(violations) == 8
    assert violations[0] == 'patient (expected string)'


def test_non_object_body_lists_all_fields():
    assert len(validate_appointment_payload(['patient'])) == 8
    assert len(validate_appointment_payload(None)) == 8


def test_booleans_are_not_numbers():
    body = dict(VALID, latitude=True, hospitalId=False)
    assert validate_appointment_payload(body) == [
        'latitude (expected number)',
        'hospitalId (expected integer)',
    ]


def test_float_hospital_id_is_rejected():
    assert validate_appointment_payload(dict(VALID, hospitalId=1.5)) == ['hospitalId (expected integer)']


def test_integer_coordinates_are_numbers():
    assert validate_appointment_payload(dict(VALID, latitude=22, longitude=88)) == []


def test_validation_does_not_mutate_body():
    body = dict(VALID)
    validate_appointment_payload(body)
    assert body == VALID


def test_missing_location():
    assert missing_location(dict(VALID, latitude=None)) is True
    assert missing_location(dict(VALID, longitude=float('nan'))) is True
    assert missing_location(VALID) is False


def test_parse_appointment_date():
    assert parse_appointment_date('2025-03-14') == date(2025, 3, 14)
    assert parse_appointment_date('2025-03-14T18:30:00.000Z') == date(2025, 3, 14)
    assert parse_appointment_date('not-a-date') is None
    assert parse_appointment_date('2025-02-30') is None
    assert parse_appointment_date(20250314) is None


def test_foreign_key_error_codes():
    class DriverError(Exception):
        pgcode = '23503'

    exc = IntegrityError('insert or update violates foreign key constraint')
    exc.__cause__ = DriverError()
    assert db_error_code(exc) == '23503'
    assert is_foreign_key_violation(exc)

    assert is_foreign_key_violation(IntegrityError(1452, 'Cannot add or update a child row'))
    assert is_foreign_key_violation(IntegrityError('FOREIGN KEY constraint failed'))
    assert not is_foreign_key_violation(IntegrityError(1062, 'Duplicate entry'))
    assert db_error_code(IntegrityError('something odd')) == 'unknown'


def test_unrepresentable_coordinates_are_missing():
    assert missing_location(dict(VALID, latitude=10 ** 400)) is True
    assert missing_location(dict(VALID, longitude=float('inf'))) is True
    assert missing_location(dict(VALID, latitude=22, longitude=88)) is False
