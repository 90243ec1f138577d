"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers


class CategorySerializer(serializers.Serializer):
    """Serializer for Category domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    display_name = serializers.CharField()
    icon = serializers.CharField(allow_null=True)
    sort_order = serializers.IntegerField()
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class TrainingClassSerializer(serializers.Serializer):
    """Serializer for TrainingClass domain model."""

    id = serializers.CharField()
    name = serializers.CharField()
    level = serializers.CharField()
    duration = serializers.CharField()
    tuition = serializers.CharField()
    category = serializers.CharField()
    sort_order = serializers.IntegerField()
    badge = serializers.CharField(allow_null=True)
    summary = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    highlights = serializers.CharField(allow_null=True)
    equipment = serializers.CharField(allow_null=True)
    prerequisites = serializers.CharField(allow_null=True)
    active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class SessionSerializer(serializers.Serializer):
    """Serializer for ClassSession domain model."""

    id = serializers.CharField()
    class_id = serializers.CharField()
    date = serializers.DateField()
    start_time = serializers.TimeField()
    end_time = serializers.TimeField()
    location = serializers.CharField(allow_null=True)
    instructor = serializers.CharField(allow_null=True)
    max_seats = serializers.IntegerField(source="max_seats.value")
    available_seats = serializers.IntegerField(source="available_seats.value")
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model."""

    id = serializers.IntegerField()
    transaction_id = serializers.CharField()
    class_id = serializers.CharField()
    session_id = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    email = serializers.CharField()
    phone = serializers.CharField()
    experience_level = serializers.CharField()
    amount = serializers.CharField()
    status = serializers.CharField()
    auth_code = serializers.CharField(allow_null=True)
    waiver_accepted = serializers.BooleanField()
    rules_accepted = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    class_name = serializers.CharField(allow_null=True)
    date = serializers.DateField(source="session_date", allow_null=True)
    start_time = serializers.TimeField(source="session_start_time", allow_null=True)
    end_time = serializers.TimeField(source="session_end_time", allow_null=True)
    location = serializers.CharField(source="session_location", allow_null=True)
