"""
Appointment intake and hospital-scoped appointment access.

Intake is public: a patient submits a payload which is validated field
by field, checked against the hospital table and inserted.  Listing and
deleting are restricted to the hospital account whose id matches the
hospital in the request path; the caller's :class:`~booking.auth.Principal`
is passed in explicitly.
"""
from __future__ import annotations

import html
import logging
import math
import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Optional

import bleach
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import DataError, IntegrityError, transaction
from django.utils.dateparse import parse_date, parse_datetime

from booking.auth import Principal
from booking.exceptions import (
    DatabaseFailure,
    Forbidden,
    ForeignKeyViolation,
    HospitalNotFound,
    InvalidDate,
    InvalidPathParameter,
    InvalidPayload,
    LocationMissing,
    NotFound,
    Unauthorized,
)
from booking.models import Appointment, Hospital
from booking.realtime.consumers import appointments_group
from booking.serializers.appointment import AppointmentSerializer
from booking.services.audit import log_action

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ('patient', 'string'),
    ('phone', 'string'),
    ('symptoms', 'string'),
    ('latitude', 'number'),
    ('longitude', 'number'),
    ('date', 'string'),
    ('time', 'string'),
    ('hospitalId', 'integer'),
)

# Driver codes reported for a foreign-key rejection: PostgreSQL SQLSTATE,
# MySQL errno (child row / parent row), SQLite extended result name.
FOREIGN_KEY_CODES = {'23503', '1452', '1216', 'SQLITE_CONSTRAINT_FOREIGNKEY'}

# Largest value a BIGINT primary key can hold
MAX_ID = 2 ** 63 - 1

_ID_RE = re.compile(r'^[0-9]+$')


def _matches(value: Any, expected: str) -> bool:
    if expected == 'string':
        return isinstance(value, str)
    if isinstance(value, bool):
        return False
    if expected == 'integer':
        return isinstance(value, int)
    return isinstance(value, (int, float))


def validate_appointment_payload(body: Any) -> list[str]:
    """Return every missing or mistyped field as ``"<field> (expected <type>)"``.

    The check never stops at the first problem; an empty list means the
    payload has the right shape.
    """
    if not isinstance(body, Mapping):
        return [f'{key} (expected {expected})' for key, expected in REQUIRED_FIELDS]
    return [
        f'{key} (expected {expected})'
        for key, expected in REQUIRED_FIELDS
        if key not in body or not _matches(body[key], expected)
    ]


def missing_location(body: Mapping) -> bool:
    """True when latitude or longitude is null or not a finite number."""
    for key in ('latitude', 'longitude'):
        value = body.get(key)
        if value is None:
            return True
        try:
            if not math.isfinite(float(value)):
                return True
        except (OverflowError, TypeError, ValueError):
            return True
    return False


def parse_appointment_date(value: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 timestamp into a calendar date."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    try:
        parsed = parse_date(text)
        if parsed is None:
            stamp = parse_datetime(text)
            parsed = stamp.date() if stamp else None
    except ValueError:
        # well formed but impossible, e.g. 2025-02-30
        return None
    return parsed


def db_error_code(exc: Exception) -> str:
    cause = exc.__cause__ or exc
    for attr in ('pgcode', 'sqlstate', 'sqlite_errorname'):
        code = getattr(cause, attr, None)
        if code:
            return str(code)
    args = getattr(cause, 'args', ())
    if args and isinstance(args[0], int):
        return str(args[0])
    if 'FOREIGN KEY constraint failed' in str(cause):
        return 'SQLITE_CONSTRAINT_FOREIGNKEY'
    return 'unknown'


def is_foreign_key_violation(exc: Exception) -> bool:
    return db_error_code(exc) in FOREIGN_KEY_CODES


def _clean(v: str) -> str:
    # strip tags only; stored text is plain, not HTML
    return html.unescape(bleach.clean(v.strip(), strip=True))


def _publish(hospital_id: int, event_type: str, appointment: dict) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    try:
        async_to_sync(channel_layer.group_send)(
            appointments_group(hospital_id),
            {'type': event_type, 'appointment': appointment},
        )
    except Exception:
        logger.warning('Could not publish %s for hospital %s', event_type, hospital_id, exc_info=True)


def create_appointment(body: Any) -> Appointment:
    """Validate an intake payload and insert exactly one appointment.

    Rules run in order: shape, location, date, hospital existence.  The
    existence check and the insert share one transaction and the hospital
    row is locked for its duration; the foreign-key constraint still
    backs this up and is reported as :class:`ForeignKeyViolation`.
    """
    violations = validate_appointment_payload(body)
    if violations:
        logger.warning('Appointment validation failed: %s', ', '.join(violations))
        raise InvalidPayload(details=violations)

    if missing_location(body):
        logger.warning('Appointment rejected: location missing')
        raise LocationMissing()

    appointment_date = parse_appointment_date(body['date'])
    if appointment_date is None:
        logger.warning('Appointment rejected: unparsable date %r', body['date'])
        raise InvalidDate()

    hospital_id = body['hospitalId']
    if not 0 < hospital_id <= MAX_ID:
        raise HospitalNotFound()

    alert = body.get('alert')
    alert = list(alert) if isinstance(alert, list) else []

    try:
        with transaction.atomic():
            hospital = Hospital.objects.select_for_update().filter(id=hospital_id).only('id').first()
            if hospital is None:
                logger.info('Appointment rejected: hospital %s not found', hospital_id)
                raise HospitalNotFound()
            appointment = Appointment.objects.create(
                hospital_id=hospital_id,
                patient=_clean(body['patient']),
                phone=body['phone'].strip(),
                symptoms=_clean(body['symptoms']),
                latitude=float(body['latitude']),
                longitude=float(body['longitude']),
                date=appointment_date,
                time=body['time'].strip(),
                alert=alert,
            )
    except IntegrityError as exc:
        code = db_error_code(exc)
        logger.error('Database error creating appointment for hospital %s: %s', hospital_id, code)
        if is_foreign_key_violation(exc):
            raise ForeignKeyViolation() from exc
        raise DatabaseFailure(code=code) from exc
    except DataError as exc:
        code = db_error_code(exc)
        logger.error('Database error creating appointment for hospital %s: %s', hospital_id, code)
        raise DatabaseFailure(code=code) from exc

    logger.info('Created appointment %s for hospital %s', appointment.id, hospital_id)
    payload = dict(AppointmentSerializer(appointment).data)
    transaction.on_commit(lambda: _publish(hospital_id, 'appointment.created', payload))
    return appointment


def _path_int(value: Any) -> Optional[int]:
    text = str(value).strip() if value is not None else ''
    if not _ID_RE.match(text):
        return None
    number = int(text)
    return number if number <= MAX_ID else None


def list_hospital_appointments(principal: Optional[Principal], hospital_id: Any) -> list[Appointment]:
    """Appointments of the principal's own hospital, earliest date first."""
    if principal is None:
        raise Unauthorized()
    hid = _path_int(hospital_id)
    if hid is None:
        raise InvalidPathParameter('Invalid hospital ID')
    if hid != principal.hospital_id:
        logger.warning('User %s denied appointments of hospital %s', principal.user_id, hid)
        raise Unauthorized()
    return list(Appointment.objects.filter(hospital_id=hid).order_by('date', 'id'))


def delete_hospital_appointment(principal: Optional[Principal], hospital_id: Any, appointment_id: Any) -> dict:
    """Delete one appointment matched on both its id and the hospital id.

    Returns the serialized row as it was before deletion.  A pair that
    does not match any row deletes nothing and raises :class:`NotFound`.
    """
    if principal is None:
        raise Unauthorized()
    hid = _path_int(hospital_id)
    if hid is None or hid != principal.hospital_id:
        logger.warning('User %s denied delete under hospital %s', principal.user_id, hospital_id)
        raise Forbidden('Forbidden - Hospital ID mismatch')
    if appointment_id is None or str(appointment_id).strip() == '':
        raise InvalidPathParameter('Appointment ID is required')
    aid = _path_int(appointment_id)
    if aid is None:
        raise InvalidPathParameter('Invalid appointment ID')

    with transaction.atomic():
        appointment = Appointment.objects.select_for_update().filter(id=aid, hospital_id=hid).first()
        if appointment is None:
            logger.info('Appointment %s not found under hospital %s', aid, hid)
            raise NotFound('Appointment not found')
        snapshot = dict(AppointmentSerializer(appointment).data)
        appointment.delete()
        log_action(
            user_id=principal.user_id, action='appointment_delete',
            object_type='appointment', object_id=aid, detail={'hospitalId': hid},
        )

    logger.info('Deleted appointment %s of hospital %s', aid, hid)
    transaction.on_commit(lambda: _publish(hid, 'appointment.deleted', snapshot))
    return snapshot
