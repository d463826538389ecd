from rest_framework import serializers
from history.models import Message


class MessageSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Message
        fields = ["id", "role", "content", "createdAt"]


class SendMessageSerializer(serializers.Serializer):
    message = serializers.CharField(
        trim_whitespace=False,
        error_messages={
            "required": "Message is required",
            "blank": "Message is required",
            "null": "Message is required",
        },
    )
    sessionId = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_message(self, value):
        if not value.strip():
            raise serializers.ValidationError("Message is required")
        return value


class HistoryQuerySerializer(serializers.Serializer):
    sessionId = serializers.CharField(
        error_messages={
            "required": "Session ID is required",
            "blank": "Session ID is required",
        },
    )
