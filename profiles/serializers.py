"""
Profiles Serializers.

Read serializers expose workers at three levels of detail (listing,
detail, admin review). Write serializers validate signup payloads and the
approval decision; they never create records themselves, profiles.services
does.
"""

from django.conf import settings
from django.contrib.auth import password_validation
from rest_framework import serializers

from accounts.serializers import PhoneField
from catalog.models import Category
from catalog.serializers import CategorySummarySerializer
from ratings.aggregation import recent_comments
from ratings.serializers import RecentCommentSerializer

from .models import CITY_CHOICES, Client, Labour

DETAIL_RATINGS_LIMIT = 10


class LabourSummarySerializer(serializers.ModelSerializer):
    categories = CategorySummarySerializer(many=True, read_only=True)
    phone = PhoneField(source='user.phone', read_only=True)

    class Meta:
        model = Labour
        fields = [
            'id', 'name', 'city', 'hourly_rate', 'categories',
            'average_rating', 'rating_count', 'phone',
        ]
        read_only_fields = fields


class LabourListSerializer(LabourSummarySerializer):
    recent_comments = serializers.SerializerMethodField()

    class Meta(LabourSummarySerializer.Meta):
        fields = LabourSummarySerializer.Meta.fields + ['recent_comments']
        read_only_fields = fields

    def get_recent_comments(self, obj):
        # Prefetched by profiles.queries.with_recent_comments when listing
        comments = getattr(obj, 'recent_comments', None)
        if comments is None:
            comments = recent_comments(obj)
        return RecentCommentSerializer(comments, many=True).data


class LabourDetailSerializer(LabourSummarySerializer):
    recent_ratings = serializers.SerializerMethodField()

    class Meta(LabourSummarySerializer.Meta):
        fields = LabourSummarySerializer.Meta.fields + ['approval_status', 'recent_ratings', 'created_at']
        read_only_fields = fields

    def get_recent_ratings(self, obj):
        ratings = obj.ratings.select_related('client').order_by('-created_at', '-id')[:DETAIL_RATINGS_LIMIT]
        return RecentCommentSerializer(ratings, many=True).data


class LabourAdminSerializer(LabourSummarySerializer):
    """Everything an admin needs to make the approval decision."""

    email = serializers.EmailField(source='user.email', read_only=True)
    reviewed_by = serializers.PrimaryKeyRelatedField(read_only=True)

    class Meta(LabourSummarySerializer.Meta):
        fields = LabourSummarySerializer.Meta.fields + [
            'email', 'approval_status', 'reviewed_at', 'reviewed_by', 'created_at',
        ]
        read_only_fields = fields


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'company', 'created_at']
        read_only_fields = fields


# =============================================================================
# WRITE SERIALIZERS
# =============================================================================

class PasswordField(serializers.CharField):
    def __init__(self, **kwargs):
        kwargs.setdefault('write_only', True)
        kwargs.setdefault('trim_whitespace', False)
        kwargs.setdefault('min_length', 6)
        super().__init__(**kwargs)


class LabourSignupSerializer(serializers.Serializer):
    phone = PhoneField()
    otp = serializers.RegexField(r'^\d{4}$', error_messages={'invalid': "OTP must be 4 digits."})
    password = PasswordField()
    name = serializers.CharField(max_length=100)
    categories = serializers.PrimaryKeyRelatedField(
        many=True,
        queryset=Category.active.all(),
        allow_empty=False,
    )
    hourly_rate = serializers.IntegerField(
        min_value=settings.LABOUR_RATE_MIN,
        max_value=settings.LABOUR_RATE_MAX,
    )
    city = serializers.ChoiceField(choices=CITY_CHOICES)

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value


class ClientSignupSerializer(serializers.Serializer):
    email = serializers.EmailField()
    phone = PhoneField(required=False, allow_null=True, allow_blank=True, default=None)
    password = PasswordField()
    name = serializers.CharField(max_length=100)
    company = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')

    def validate_email(self, value):
        return value.lower()

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value


class ApprovalDecisionSerializer(serializers.Serializer):
    is_approved = serializers.BooleanField()

