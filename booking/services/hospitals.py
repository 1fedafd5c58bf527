from django.conf import settings
from django.core.cache import cache

from booking.models import Hospital
from booking.serializers.hospital import HospitalSerializer

DIRECTORY_CACHE_KEY = 'hospitals:directory'


def list_hospitals() -> list[dict]:
    qs = Hospital.objects.prefetch_related('doctors').order_by('id')
    return list(HospitalSerializer(qs, many=True).data)


def hospital_directory(*, refresh: bool=False) -> list[dict]:
    """Serialized directory, served from cache for ``HOSPITAL_CACHE_SECONDS``."""
    if not refresh:
        cached = cache.get(DIRECTORY_CACHE_KEY)
        if cached is not None:
            return cached
    data = list_hospitals()
    cache.set(DIRECTORY_CACHE_KEY, data, settings.HOSPITAL_CACHE_SECONDS)
    return data


def invalidate_hospital_directory() -> None:
    cache.delete(DIRECTORY_CACHE_KEY)
