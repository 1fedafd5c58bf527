from django.db.models import Prefetch

from booking.exceptions import NotFound
from booking.models import HelpRequest, HelpReply


def list_help_requests(*, page: int=1, limit: int=10) -> list[HelpRequest]:
    page = max(1, int(page or 1))
    limit = min(50, max(1, int(limit or 10)))
    start = (page-1)*limit
    replies = Prefetch('replies', queryset=HelpReply.objects.order_by('created_at', 'id'))
    qs = HelpRequest.objects.prefetch_related(replies).order_by('-created_at', '-id')
    return list(qs[start:start+limit])


def create_help_request(*, name: str, description: str) -> HelpRequest:
    return HelpRequest.objects.create(name=name, description=description)


def reply_to_help_request(*, request_id: int, name: str, message: str) -> HelpReply:
    help_request = HelpRequest.objects.filter(id=request_id).first()
    if help_request is None:
        raise NotFound('Request not found')
    return HelpReply.objects.create(request=help_request, name=name, message=message)
