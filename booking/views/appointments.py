"""
Appointment endpoints.

Patients submit booking requests through the public intake endpoint.
Hospital accounts list and delete the appointments addressed to their
own hospital; the hospital id in the path must match the signed-in
account.  Authorization decisions are made in
``booking.services.appointments`` from an explicit principal.
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..auth import get_principal
from ..serializers.appointment import AppointmentSerializer
from ..services.appointments import create_appointment, delete_hospital_appointment, list_hospital_appointments
from ..throttling import AppointmentWriteThrottle

logger = logging.getLogger(__name__)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([AppointmentWriteThrottle])
def submit_appointment(request):
    """Create an appointment from a patient's booking request.

    Returns 201 with the stored row.  Every missing or mistyped field is
    reported at once under ``details``.
    """
    body = request.data
    hospital_ref = body.get('hospitalId') if hasattr(body, 'get') else None
    logger.info('Received appointment submission for hospital %r', hospital_ref)
    appointment = create_appointment(body)
    return Response(AppointmentSerializer(appointment).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'DELETE'])
@permission_classes([AllowAny])
def hospital_appointments(request, hospital_id):
    """List the hospital's appointments ordered by date.

    ``DELETE`` on the collection has no appointment id and is answered
    with 400 once the caller has been authorized.
    """
    principal = get_principal(request)
    if request.method == 'DELETE':
        delete_hospital_appointment(principal, hospital_id, None)
    appointments = list_hospital_appointments(principal, hospital_id)
    return Response(AppointmentSerializer(appointments, many=True).data)


@api_view(['DELETE'])
@permission_classes([AllowAny])
def hospital_appointment_detail(request, hospital_id, appointment_id):
    deleted = delete_hospital_appointment(get_principal(request), hospital_id, appointment_id)
    return Response(
        {'message': 'Appointment deleted successfully', 'deletedAppointment': deleted},
        status=status.HTTP_200_OK,
    )
