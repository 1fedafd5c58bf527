"""
Public hospital directory.

The directory is read by the patient-facing client from any origin, so
it answers with permissive CORS headers and handles its own pre-flight
(``CORS_URLS_REGEX`` keeps ``corsheaders`` out of this path).
"""
from __future__ import annotations

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..services.hospitals import hospital_directory

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, OPTIONS',
}


@api_view(['GET', 'OPTIONS'])
@authentication_classes([])
@permission_classes([AllowAny])
def list_hospitals(request):
    """Return all hospitals with their doctors."""
    if request.method == 'OPTIONS':
        return Response(
            status=status.HTTP_204_NO_CONTENT,
            headers={**CORS_HEADERS, 'Access-Control-Allow-Headers': 'Content-Type'},
        )
    try:
        data = hospital_directory()
    except DatabaseError:
        logger.exception('Failed to fetch hospitals')
        return Response({'message': 'Failed to fetch hospitals'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(data, headers=CORS_HEADERS)
