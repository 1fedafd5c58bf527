from django.core.management.base import BaseCommand
from django.utils import timezone
from channels.layers import get_channel_layer
from asgiref.sync import async_to_sync

from booking.models import Hospital
from booking.realtime.consumers import appointments_group
from booking.services.hospitals import DIRECTORY_CACHE_KEY, hospital_directory


class Command(BaseCommand):
    help = "Rewarm the hospital directory cache; broadcast a refresh event to hospital feeds."

    def handle(self, *args, **options):
        now = timezone.now()
        data = hospital_directory(refresh=True)

        channel_layer = get_channel_layer()
        if channel_layer is not None:
            event = {"type": "directory.refresh", "version": int(now.timestamp()), "ts": now.isoformat()}
            for hid in Hospital.objects.values_list('id', flat=True):
                async_to_sync(channel_layer.group_send)(appointments_group(hid), event)

        self.stdout.write(self.style.SUCCESS(f"Refreshed {DIRECTORY_CACHE_KEY} ({len(data)} hospitals) at {now}"))
