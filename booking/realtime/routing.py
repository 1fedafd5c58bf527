from django.urls import path

from booking.realtime.consumers import HospitalAppointmentsConsumer

websocket_urlpatterns = [
    path("ws/hospital/<int:hospital_id>/appointments/", HospitalAppointmentsConsumer.as_asgi()),
]
