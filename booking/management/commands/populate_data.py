"""
Management command to populate the database with demo data.

Safe to run repeatedly: rows are matched on a natural key and only
created when missing.
"""
from datetime import timedelta

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from booking.models import Appointment, Doctor, HelpReply, HelpRequest, Hospital, User
from booking.services.hospitals import invalidate_hospital_directory

HOSPITALS = [
    {
        'name': 'City General Hospital', 'address': '12 Park Street, Kolkata',
        'consultation_fee': '₹500', 'rating': '4.5', 'experience': '25+ years',
        'wait_time': '20 mins', 'contact': '+91 33 2222 1111',
        'ambulance': 4, 'blood': 30, 'oxygen': 50, 'beds': 120,
        'latitude': 22.5535, 'longitude': 88.3510,
        'specialities': ['Cardiology', 'Orthopedics', 'General Medicine'],
        'about': 'Multi-speciality hospital with a 24x7 emergency unit.',
        'verified': True, 'amenities': ['Pharmacy', 'Cafeteria', 'Parking'],
        'doctors': [
            ('Dr. Anjali Sen', 'Cardiology', '15 years'),
            ('Dr. Rahul Das', 'Orthopedics', '10 years'),
        ],
    },
    {
        'name': 'Lakeside Care Clinic', 'address': '4 Lake Road, Kolkata',
        'consultation_fee': '₹300', 'rating': '4.2', 'experience': '10 years',
        'wait_time': '10 mins', 'contact': '+91 33 2444 5555',
        'ambulance': 1, 'blood': 8, 'oxygen': 15, 'beds': 30,
        'latitude': 22.5150, 'longitude': 88.3600,
        'specialities': ['Pediatrics', 'Dermatology'],
        'about': 'Neighbourhood clinic focusing on family care.',
        'verified': False, 'amenities': ['Pharmacy'],
        'doctors': [
            ('Dr. Meera Paul', 'Pediatrics', '8 years'),
        ],
    },
    {
        'name': 'Riverside Medical Centre', 'address': '88 Strand Road, Howrah',
        'consultation_fee': '₹450', 'rating': '4.0', 'experience': '18 years',
        'wait_time': '30 mins', 'contact': '+91 33 2666 7777',
        'ambulance': 2, 'blood': 12, 'oxygen': 25, 'beds': 60,
        'latitude': 22.5850, 'longitude': 88.3420,
        'specialities': ['Neurology', 'General Surgery'],
        'about': '',
        'verified': True, 'amenities': ['Parking', 'ICU'],
        'doctors': [
            ('Dr. Sourav Ghosh', 'Neurology', '12 years'),
            ('Dr. Priya Roy', 'General Surgery', '9 years'),
        ],
    },
]


class Command(BaseCommand):
    help = 'Populate database with demo hospitals, accounts, appointments and community posts'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating demo data...')
        hospitals = self.create_hospitals()
        self.create_accounts(hospitals)
        self.create_appointments(hospitals)
        self.create_community_posts()
        invalidate_hospital_directory()
        self.stdout.write(self.style.SUCCESS('Demo data ready.'))

    def create_hospitals(self):
        hospitals = []
        for data in HOSPITALS:
            data = dict(data)
            doctors = data.pop('doctors')
            hospital, created = Hospital.objects.get_or_create(name=data['name'], defaults=data)
            for name, specialty, experience in doctors:
                Doctor.objects.get_or_create(
                    hospital=hospital, name=name,
                    defaults={'specialty': specialty, 'experience': experience},
                )
            hospitals.append(hospital)
            self.stdout.write(f'{"Created" if created else "Found"} hospital: {hospital}')
        return hospitals

    def create_accounts(self, hospitals):
        for i, hospital in enumerate(hospitals, start=1):
            user, created = User.objects.get_or_create(
                username=f'hospital{i}',
                defaults={
                    'email': f'hospital{i}@carelink.test',
                    'password': make_password('123456'),
                    'role': 'hospital',
                    'hospital': hospital,
                    'license_number': f'LIC-{1000 + i}',
                    'first_name': hospital.name,
                },
            )
            if created:
                self.stdout.write(f'Created account: {user.username} -> {hospital.name}')

    def create_appointments(self, hospitals):
        today = timezone.localdate()
        samples = [
            ('Arjun Mehta', '9876500001', 'Chest pain since morning', ['cardiac']),
            ('Sara Khan', '9876500002', 'High fever and cough', []),
            ('Vikram Bose', '9876500003', 'Twisted ankle', []),
        ]
        for offset, hospital in enumerate(hospitals):
            patient, phone, symptoms, alert = samples[offset % len(samples)]
            _, created = Appointment.objects.get_or_create(
                hospital=hospital, patient=patient, phone=phone,
                defaults={
                    'symptoms': symptoms,
                    'latitude': hospital.latitude + 0.01,
                    'longitude': hospital.longitude - 0.01,
                    'date': today + timedelta(days=offset + 1),
                    'time': '10:30 AM',
                    'alert': alert,
                },
            )
            if created:
                self.stdout.write(f'Created appointment for {patient} at {hospital.name}')

    def create_community_posts(self):
        post, created = HelpRequest.objects.get_or_create(
            name='Ritika',
            description='Need O+ blood donors near Salt Lake this weekend.',
        )
        if created:
            HelpReply.objects.create(request=post, name='Aman', message='I can donate on Saturday.')
            self.stdout.write('Created community post with reply')
