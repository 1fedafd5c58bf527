"""
Per-IP rate limits for the public write endpoints and sign-in.

Function views built with ``@api_view`` cannot carry a
``throttle_scope``, so each scope gets its own throttle class.  Rates
live in ``REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']``.
"""
from rest_framework.throttling import AnonRateThrottle


class AppointmentWriteThrottle(AnonRateThrottle):
    scope = 'appointment_write'


class CommunityWriteThrottle(AnonRateThrottle):
    scope = 'community_write'


class LoginThrottle(AnonRateThrottle):
    scope = 'login'
