import pytest
from rest_framework.test import APIClient

from booking.models import HelpReply, HelpRequest

pytestmark = pytest.mark.django_db


def test_submit_and_list():
    client = APIClient()
    r = client.post('/api/community/submit', {'name': 'Ritika', 'description': 'Need O+ blood'}, format='json')
    assert r.status_code == 201
    assert r.data['name'] == 'Ritika'
    assert r.data['replies'] == []

    listing = client.get('/api/community')
    assert listing.status_code == 200
    assert [item['id'] for item in listing.data] == [r.data['id']]


def test_list_is_newest_first_with_replies_in_order():
    older = HelpRequest.objects.create(name='A', description='first')
    newer = HelpRequest.objects.create(name='B', description='second')
    HelpReply.objects.create(request=older, name='x', message='one')
    HelpReply.objects.create(request=older, name='y', message='two')

    data = APIClient().get('/api/community').data
    assert [item['id'] for item in data] == [newer.id, older.id]
    assert [reply['message'] for reply in data[1]['replies']] == ['one', 'two']


def test_list_pagination():
    for i in range(12):
        HelpRequest.objects.create(name=f'n{i}', description='d')
    client = APIClient()
    assert len(client.get('/api/community').data) == 10
    assert len(client.get('/api/community', {'page': 2, 'limit': 10}).data) == 2
    assert len(client.get('/api/community', {'limit': 5}).data) == 5
    assert client.get('/api/community', {'limit': 500}).status_code == 400


def test_reply():
    post = HelpRequest.objects.create(name='A', description='help')
    r = APIClient().post(
        '/api/community/reply', {'requestId': post.id, 'name': 'Aman', 'message': 'On my way'}, format='json',
    )
    assert r.status_code == 201
    assert r.data['message'] == 'On my way'
    assert post.replies.count() == 1


def test_reply_to_missing_request():
    r = APIClient().post('/api/community/reply', {'requestId': 4242, 'name': 'A', 'message': 'hi'}, format='json')
    assert r.status_code == 404
    assert r.data == {'error': 'Request not found'}


def test_submit_requires_fields():
    r = APIClient().post('/api/community/submit', {'name': '  '}, format='json')
    assert r.status_code == 400
    assert r.data['error'] == 'Invalid request data'
    assert HelpRequest.objects.count() == 0


def test_submit_strips_markup():
    r = APIClient().post(
        '/api/community/submit', {'name': '<b>Ritika</b>', 'description': '<script>x</script>help'}, format='json',
    )
    assert r.status_code == 201
    assert '<' not in HelpRequest.objects.get().name


def test_plain_text_is_stored_unchanged():
    r = APIClient().post(
        '/api/community/submit', {'name': 'Tom & Jerry', 'description': 'need help for <2 days'}, format='json',
    )
    assert r.status_code == 201
    post = HelpRequest.objects.get()
    assert post.name == 'Tom & Jerry'
    assert post.description == 'need help for <2 days'
