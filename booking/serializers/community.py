import html

import bleach
from rest_framework import serializers

from booking.models import HelpRequest, HelpReply


def _clean(v: str) -> str:
    return html.unescape(bleach.clean((v or '').strip(), strip=True))


class HelpRequestCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=4000)

    def validate_name(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_description(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Description is required')
        return v


class HelpReplyCreateSerializer(serializers.Serializer):
    requestId = serializers.IntegerField(min_value=1)
    name = serializers.CharField(max_length=100)
    message = serializers.CharField(max_length=2000)

    def validate_name(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Name is required')
        return v

    def validate_message(self, v):
        v = _clean(v)
        if not v:
            raise serializers.ValidationError('Message is required')
        return v


class HelpListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=50)


class HelpReplySerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = HelpReply
        fields = ['id', 'name', 'message', 'createdAt']


class HelpRequestSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    replies = HelpReplySerializer(many=True, read_only=True)

    class Meta:
        model = HelpRequest
        fields = ['id', 'name', 'description', 'createdAt', 'replies']
