from rest_framework import serializers

from .models import Rating


class RatingSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)
    labour_name = serializers.CharField(source='labour.name', read_only=True)
    job_title = serializers.CharField(source='job.title', read_only=True)

    class Meta:
        model = Rating
        fields = [
            'id', 'job', 'job_title', 'client', 'client_name',
            'labour', 'labour_name', 'rating', 'comment', 'created_at',
        ]
        read_only_fields = fields


class RecentCommentSerializer(serializers.ModelSerializer):
    """Short form shown next to a worker in listings."""

    client_name = serializers.CharField(source='client.name', read_only=True)

    class Meta:
        model = Rating
        fields = ['rating', 'comment', 'created_at', 'client_name']
        read_only_fields = fields


class RatingStatsSerializer(serializers.Serializer):
    labour_id = serializers.CharField()
    average_rating = serializers.FloatField()
    total_ratings = serializers.IntegerField()
    distribution = serializers.DictField(child=serializers.IntegerField())


class RateJobSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
