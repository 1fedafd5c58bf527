from rest_framework import serializers

from booking.models import Hospital, Doctor


class DoctorSerializer(serializers.ModelSerializer):
    hospitalId = serializers.IntegerField(source='hospital_id', read_only=True)

    class Meta:
        model = Doctor
        fields = ['id', 'name', 'specialty', 'experience', 'hospitalId']


class HospitalSerializer(serializers.ModelSerializer):
    consultationFee = serializers.CharField(source='consultation_fee')
    waitTime = serializers.CharField(source='wait_time')
    nextAvailable = serializers.DateTimeField(source='next_available', format='iso-8601')
    doctors = DoctorSerializer(many=True, read_only=True)

    class Meta:
        model = Hospital
        fields = [
            'id', 'name', 'address', 'consultationFee', 'rating', 'experience',
            'waitTime', 'contact', 'ambulance', 'blood', 'oxygen', 'beds',
            'latitude', 'longitude', 'specialities', 'about', 'nextAvailable',
            'verified', 'amenities', 'doctors',
        ]
