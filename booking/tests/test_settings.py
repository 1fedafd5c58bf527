from carelink import settings as project_settings


def test_default_hosts_exclude_test_client_host():
    # the test runner adds "testserver" to the live settings on its own
    assert 'testserver' not in project_settings.ALLOWED_HOSTS
