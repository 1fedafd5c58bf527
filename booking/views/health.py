"""Liveness probe used by the load balancer and ``api_smoke_test.py``."""
import logging

from django.core.cache import cache
from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def _database_ok() -> bool:
    with connections['default'].cursor() as c:
        c.execute('SELECT 1')
        row = c.fetchone()
    return bool(row and row[0] == 1)


def healthz(request):
    try:
        db_ok = _database_ok()
    except DatabaseError:
        logger.exception('Health check: database unavailable')
        return JsonResponse({'ok': False, 'db': False, 'error': 'database unavailable'}, status=500)
    try:
        cache.set('healthz:ping', 1, 5)
        cache_ok = cache.get('healthz:ping') == 1
    except Exception:
        # reported, not fatal
        logger.warning('Health check: cache unavailable', exc_info=True)
        cache_ok = False
    return JsonResponse({'ok': db_ok, 'db': db_ok, 'cache': cache_ok}, status=200 if db_ok else 500)
