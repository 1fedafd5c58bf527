"""
Authentication views for hospital accounts.

Hospital staff sign in with the account e-mail, password and, when the
account has one on file, the hospital's registration licence number.
A successful sign-in opens a Django session and also returns a JWT
pair for clients that prefer bearer tokens.  These views live apart
from ``booking.authentication`` so that DRF can import the
authentication classes without pulling in the serializers.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login, logout
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from booking.auth import get_principal
from booking.exceptions import Unauthorized
from booking.serializers.auth import LoginSerializer, LogoutSerializer
from booking.services.audit import log_action
from booking.throttling import LoginThrottle

from .models import User

logger = logging.getLogger(__name__)


def _fail(email, reason, request):
    log_action(user_id=None, action='login', object_type='user', object_id=None,
               detail={'result': 'fail', 'email': email, 'reason': reason, 'ip': request.META.get('REMOTE_ADDR')})
    logger.info('Login failed for %s: %s', email, reason)
    return Response({'error': 'Invalid credentials'}, status=400)


# ---------------------------------------------------------------------
# E-mail/password login
# ---------------------------------------------------------------------
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([LoginThrottle])
def login_view(request):
    """
    Sign in a hospital account.
    Accepts fields:
      - email
      - password
      - licenseNumber (required when the account has one on file)
    """
    s = LoginSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    email = vd['email']

    account = User.objects.filter(email__iexact=email).first()
    if account is None:
        return _fail(email, 'unknown_email', request)

    user = authenticate(request, username=account.username, password=vd['password'])
    if not user:
        return _fail(email, 'bad_password', request)

    license_number = (vd.get('licenseNumber') or '').strip()
    if user.license_number and license_number != user.license_number:
        return _fail(email, 'bad_license', request)

    if user.hospital_id is None:
        return _fail(email, 'no_hospital', request)

    login(request._request, user)
    log_action(user_id=user.id, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': request.META.get('REMOTE_ADDR')})
    logger.info('User %s signed in for hospital %s', user.id, user.hospital_id)

    refresh = RefreshToken.for_user(user)
    payload: dict[str, object] = {
        'jwt_access': str(refresh.access_token),
        'jwt_refresh': str(refresh),
        'user': {
            'id': user.id,
            'email': user.email,
            'name': user.get_full_name() or user.username,
            'role': user.role,
            'hospitalId': user.hospital_id,
        },
    }
    return Response(payload, status=200)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    """End the session and blacklist the refresh token if one is given."""
    s = LogoutSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    refresh = s.validated_data.get('refresh')
    blacklisted = 0
    if refresh:
        try:
            RefreshToken(refresh).blacklist()
            blacklisted = 1
        except TokenError:
            logger.info('Ignoring invalid refresh token on logout')
    user_id = request.user.id if request.user.is_authenticated else None
    logout(request._request)
    if user_id is not None:
        log_action(user_id=user_id, action='logout', object_type='user', object_id=user_id)
    return Response({'ok': True, 'blacklisted': blacklisted})


@api_view(['GET'])
@permission_classes([AllowAny])
def session_view(request):
    principal = get_principal(request)
    if principal is None:
        raise Unauthorized()
    return Response({
        'user': {
            'id': principal.user_id,
            'email': principal.email,
            'hospitalId': principal.hospital_id,
        },
    })


# ---------------------------------------------------------------------
# JWT refresh
# ---------------------------------------------------------------------
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def jwt_refresh_view(request):
    """Return a new access token from refresh token."""
    view = TokenRefreshView.as_view()
    resp = view(request._request)
    if isinstance(resp, Response):
        data = dict(resp.data)
        if 'access' in data and 'jwt_access' not in data:
            data['jwt_access'] = data.pop('access')
        if 'refresh' in data and 'jwt_refresh' not in data:
            data['jwt_refresh'] = data.pop('refresh')
        return Response(data, status=resp.status_code)
    return resp
