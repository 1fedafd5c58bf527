from rest_framework import serializers

from booking.models import Appointment


class AppointmentSerializer(serializers.ModelSerializer):
    hospitalId = serializers.IntegerField(source='hospital_id', read_only=True)
    date = serializers.DateField(format='%Y-%m-%d', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'patient', 'phone', 'symptoms', 'latitude', 'longitude',
            'date', 'time', 'alert', 'hospitalId', 'createdAt',
        ]
        read_only_fields = fields
