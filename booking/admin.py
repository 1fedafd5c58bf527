"""
Django admin registrations for the booking models.

Superusers use ``/admin/`` to maintain the hospital directory, create
hospital accounts and inspect appointments and audit events.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import (
    Appointment,
    AuditEvent,
    Doctor,
    HelpReply,
    HelpRequest,
    Hospital,
    User,
)


class DoctorInline(admin.TabularInline):
    model = Doctor
    extra = 0


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'address', 'rating', 'beds', 'verified')
    list_filter = ('verified',)
    search_fields = ('id', 'name', 'address')
    inlines = [DoctorInline]


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialty', 'hospital')
    search_fields = ('name', 'specialty', 'hospital__name')


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ('username', 'email', 'role', 'hospital', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_staff')
    search_fields = ('username', 'email', 'license_number')
    fieldsets = DjangoUserAdmin.fieldsets + (
        ('Hospital binding', {'fields': ('role', 'hospital', 'license_number')}),
    )


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'hospital', 'date', 'time', 'created_at')
    list_filter = ('hospital', 'date')
    search_fields = ('id', 'patient', 'hospital__name')


class HelpReplyInline(admin.TabularInline):
    model = HelpReply
    extra = 0


@admin.register(HelpRequest)
class HelpRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'created_at')
    search_fields = ('name', 'description')
    inlines = [HelpReplyInline]


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
    search_fields = ('object_type', 'user__username')
