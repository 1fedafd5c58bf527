"""
URL mappings for the booking API.

Paths carry no trailing slash (``APPEND_SLASH`` is off) and match the
routes the patient and hospital clients already call.  Path ids are
captured as text; the services parse them so that a malformed id is
answered with 400 rather than a 404 from the resolver.
"""
from django.urls import path, include

from .auth_views import jwt_refresh_view, login_view, logout_view, session_view
from .views import appointments, community, health, hospitals


urlpatterns = [
    path('', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view),
    path('api/auth/logout', logout_view),
    path('api/auth/refresh', jwt_refresh_view),
    path('api/auth/session', session_view),
    # Hospital directory
    path('api/hospital', hospitals.list_hospitals),
    # Appointments
    path('api/appointments', appointments.submit_appointment),
    path('api/hospital/<str:hospital_id>/appointments', appointments.hospital_appointments),
    path('api/hospital/<str:hospital_id>/appointments/<str:appointment_id>', appointments.hospital_appointment_detail),
    # Community board
    path('api/community', community.community_list),
    path('api/community/submit', community.community_submit),
    path('api/community/reply', community.community_reply),
]
