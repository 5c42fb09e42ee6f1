"""
Messaging app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from .models import Message


class MessageSerializer(serializers.ModelSerializer):
    sender_name = serializers.SerializerMethodField()

    class Meta:
        model = Message
        fields = [
            "id",
            "sender",
            "sender_name",
            "sender_role",
            "body",
            "is_seen",
            "seen_at",
            "created_at",
        ]
        read_only_fields = fields

    def get_sender_name(self, obj: Message) -> str:
        return obj.sender.get_full_name() or obj.sender.username


class MessageCreateSerializer(serializers.Serializer):
    body = serializers.CharField(help_text="Message text.")


class UnreadCountsSerializer(serializers.Serializer):
    counts = serializers.DictField(
        child=serializers.IntegerField(),
        read_only=True,
        help_text="Complaint code → unseen messages from the other side.",
    )
    total = serializers.IntegerField(read_only=True)
