"""
API error types and the DRF exception handler.

Every error leaves the API as ``{"error": <message>}`` with optional
``details`` (list of offending fields) and ``code`` (database
classification).  Unexpected exceptions are logged and reported with a
generic message so that driver errors never reach the client.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import APIException, AuthenticationFailed, NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class ApiError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Bad request'
    default_code = 'bad_request'

    def __init__(self, message=None, *, details=None, code=None):
        self.message = message or self.default_detail
        self.details = details
        self.code = code
        super().__init__(self.message, self.default_code)


class InvalidPayload(ApiError):
    default_detail = 'Invalid request data'
    default_code = 'invalid_payload'


class LocationMissing(ApiError):
    default_detail = 'Location data missing (latitude and longitude are required).'
    default_code = 'location_missing'


class InvalidDate(ApiError):
    default_detail = 'Invalid date format'
    default_code = 'invalid_date'


class HospitalNotFound(ApiError):
    default_detail = 'Hospital not found'
    default_code = 'hospital_not_found'


class ForeignKeyViolation(ApiError):
    default_detail = 'Invalid hospital ID. Hospital not found.'
    default_code = 'foreign_key_violation'


class DatabaseFailure(ApiError):
    default_detail = 'Database error'
    default_code = 'database_error'


class InvalidPathParameter(ApiError):
    default_code = 'invalid_path_parameter'


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = 'Unauthorized'
    default_code = 'unauthorized'


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Forbidden'
    default_code = 'forbidden'


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found'
    default_code = 'not_found'


def api_exception_handler(exc, context):
    if isinstance(exc, ApiError):
        body = {'error': exc.message}
        if exc.details:
            body['details'] = exc.details
        if exc.code:
            body['code'] = exc.code
        return Response(body, status=exc.status_code)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.error(
            'Unhandled error for %s %s',
            getattr(request, 'method', '-'), getattr(request, 'path', '-'),
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return Response({'error': 'Internal server error'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return Response({'error': 'Unauthorized'}, status=status.HTTP_401_UNAUTHORIZED, headers=_auth_headers(resp))

    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    body = {'error': str(detail) if not isinstance(detail, (dict, list)) else 'Invalid request data'}
    if isinstance(detail, (dict, list)):
        body['details'] = detail
    return Response(body, status=resp.status_code, headers=_auth_headers(resp))


def _auth_headers(resp):
    headers = {}
    for name in ('WWW-Authenticate', 'Retry-After'):
        if resp.has_header(name):
            headers[name] = resp[name]
    return headers
