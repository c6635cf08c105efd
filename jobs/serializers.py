"""
Jobs Serializers.
"""

from rest_framework import serializers

from catalog.models import Category
from catalog.serializers import CategorySummarySerializer
from profiles.models import CITY_CHOICES, Client, Labour
from profiles.serializers import LabourSummarySerializer

from .models import Job, JobApplication, Settlement


class ClientBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'company']
        read_only_fields = fields


class LabourBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Labour
        fields = ['id', 'name', 'hourly_rate', 'average_rating']
        read_only_fields = fields


class SettlementSerializer(serializers.ModelSerializer):
    class Meta:
        model = Settlement
        fields = ['reference', 'amount', 'recorded_at']
        read_only_fields = fields


class JobSerializer(serializers.ModelSerializer):
    category = CategorySummarySerializer(read_only=True)
    client = ClientBriefSerializer(read_only=True)
    labour = LabourBriefSerializer(read_only=True)
    estimated_cost = serializers.IntegerField(read_only=True)

    class Meta:
        model = Job
        fields = [
            'id', 'title', 'description', 'category', 'city',
            'hourly_rate', 'estimated_hours', 'estimated_cost', 'status',
            'client', 'labour',
            'accepted_at', 'work_completed_at', 'payment_received_at',
            'completed_at', 'cancelled_at', 'created_at',
        ]
        read_only_fields = fields


class JobDetailSerializer(JobSerializer):
    settlement = serializers.SerializerMethodField()

    class Meta(JobSerializer.Meta):
        fields = JobSerializer.Meta.fields + ['settlement']
        read_only_fields = fields

    def get_settlement(self, obj):
        settlement = Settlement.objects.filter(job=obj).first()
        return SettlementSerializer(settlement).data if settlement else None


class JobCreateSerializer(serializers.Serializer):
    category = serializers.PrimaryKeyRelatedField(queryset=Category.active.all())
    title = serializers.CharField(max_length=100)
    description = serializers.CharField(max_length=1000)
    city = serializers.ChoiceField(choices=CITY_CHOICES)
    estimated_hours = serializers.IntegerField(min_value=1, max_value=100)


class JobFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Job.Status.choices, required=False)


# =============================================================================
# APPLICATIONS
# =============================================================================

class JobApplicationSerializer(serializers.ModelSerializer):
    """An application as the job's client sees it."""

    labour = LabourSummarySerializer(read_only=True)

    class Meta:
        model = JobApplication
        fields = ['id', 'job', 'labour', 'status', 'message', 'responded_at', 'created_at']
        read_only_fields = fields


class MyApplicationSerializer(serializers.ModelSerializer):
    """An application as the applying worker sees it."""

    job = JobSerializer(read_only=True)

    class Meta:
        model = JobApplication
        fields = ['id', 'job', 'status', 'message', 'responded_at', 'created_at']
        read_only_fields = fields


class ApplicationCreateSerializer(serializers.Serializer):
    message = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class ApplicationFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobApplication.Status.choices, required=False)
