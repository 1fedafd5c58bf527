import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttles and the directory cache share the default cache
    cache.clear()
    yield
    cache.clear()
