"""
Community support board.

Anyone may post a help request or reply to one; no account is needed.
Requests are listed newest first with their replies in posting order.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ..serializers.community import (
    HelpListQuerySerializer,
    HelpReplyCreateSerializer,
    HelpReplySerializer,
    HelpRequestCreateSerializer,
    HelpRequestSerializer,
)
from ..services.community import create_help_request, list_help_requests, reply_to_help_request
from ..throttling import CommunityWriteThrottle


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def community_list(request):
    q = HelpListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    items = list_help_requests(
        page=q.validated_data.get('page', 1),
        limit=q.validated_data.get('limit', 10),
    )
    return Response(HelpRequestSerializer(items, many=True).data)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([CommunityWriteThrottle])
def community_submit(request):
    s = HelpRequestCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    obj = create_help_request(**s.validated_data)
    return Response(HelpRequestSerializer(obj).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
@throttle_classes([CommunityWriteThrottle])
def community_reply(request):
    """Reply to an existing help request (``requestId``, ``name``, ``message``)."""
    s = HelpReplyCreateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    reply = reply_to_help_request(
        request_id=s.validated_data['requestId'],
        name=s.validated_data['name'],
        message=s.validated_data['message'],
    )
    return Response(HelpReplySerializer(reply).data, status=status.HTTP_201_CREATED)
