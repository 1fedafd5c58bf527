"""
Database models for the booking backend.

These models capture hospitals and their doctors, the appointment
requests patients submit to them, the hospital accounts that sign in to
manage those appointments, and the community support board.  Field
names on the wire are camelCase (see ``booking.serializers``); the
models keep Django's snake_case.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class Hospital(models.Model):
    """A hospital listed in the public directory.

    The integer primary key doubles as the principal identifier of the
    hospital account that manages its appointments.
    """
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255, blank=True)
    consultation_fee = models.CharField(max_length=50, blank=True)
    rating = models.CharField(max_length=20, blank=True)
    experience = models.CharField(max_length=100, blank=True)
    wait_time = models.CharField(max_length=50, blank=True)
    contact = models.CharField(max_length=50, blank=True)
    # Live capacity counters shown on the directory cards
    ambulance = models.PositiveIntegerField(default=0)
    blood = models.PositiveIntegerField(default=0)
    oxygen = models.PositiveIntegerField(default=0)
    beds = models.PositiveIntegerField(default=0)
    latitude = models.FloatField()
    longitude = models.FloatField()
    specialities = models.JSONField(default=list, blank=True)
    about = models.TextField(blank=True)
    next_available = models.DateTimeField(default=timezone.now)
    verified = models.BooleanField(default=False)
    amenities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


class Doctor(models.Model):
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='doctors')
    name = models.CharField(max_length=255)
    specialty = models.CharField(max_length=255, blank=True)
    experience = models.CharField(max_length=100, blank=True)

    def __str__(self) -> str:
        return f"{self.name} @ {self.hospital_id}"


class User(AbstractUser):
    """Custom user model bound to the hospital it signs in for.

    Hospital accounts carry the registration licence number used at
    sign-in.  Staff accounts exist for the Django admin and have no
    hospital binding, so they never act as an appointment principal.
    """
    ROLE_CHOICES = [
        ('hospital', 'Hospital'),
        ('staff', 'Staff'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default='hospital')
    license_number = models.CharField(max_length=64, blank=True)
    hospital = models.ForeignKey(
        Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='accounts'
    )

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Appointment(models.Model):
    """A booking request submitted by a patient.

    Appointments are created by the public intake endpoint and deleted
    by the owning hospital; they are never updated.
    """
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='appointments')
    patient = models.CharField(max_length=255)
    phone = models.CharField(max_length=32)
    symptoms = models.TextField()
    latitude = models.FloatField()
    longitude = models.FloatField()
    date = models.DateField(db_index=True)
    # Free-form slot label as chosen on the client, e.g. "10:30 AM"
    time = models.CharField(max_length=50)
    alert = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['hospital', 'date'], name='appointment_hospital_date_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.patient} @ {self.hospital_id} on {self.date}"


class HelpRequest(models.Model):
    """A post on the community support board."""
    name = models.CharField(max_length=100)
    description = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self) -> str:
        return f"{self.name}: {self.description[:30]}"


class HelpReply(models.Model):
    request = models.ForeignKey(HelpRequest, on_delete=models.CASCADE, related_name='replies')
    name = models.CharField(max_length=100)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"Reply to {self.request_id} by {self.name}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.BigIntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='auditevent_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='auditevent_object_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
