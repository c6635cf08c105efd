"""
Ratings API Views - read-only. Ratings are written by POST /api/jobs/{id}/rate/.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action

from api.base import APIResponse, BaseViewSet

from . import aggregation
from .serializers import RatingSerializer, RatingStatsSerializer


class RatingViewSet(BaseViewSet):
    """
    labour:       paginated ratings for a worker, with their aggregate in ``meta``
    labour_stats: average, count and 1-5 histogram for a worker
    job:          the rating left on one job
    client:       ratings written by a client
    """

    serializer_class = RatingSerializer

    @action(detail=False, methods=['get'], url_path=r'labour/(?P<labour_id>[^/.]+)')
    def labour(self, request, labour_id=None):
        labour, queryset = aggregation.ratings_for_labour(labour_id)
        response = self.paginated(queryset)
        response.data['meta']['labour'] = {
            'id': str(labour.pk),
            'name': labour.name,
            'average_rating': labour.average_rating,
            'rating_count': labour.rating_count,
        }
        return response

    @extend_schema(responses=RatingStatsSerializer)
    @action(detail=False, methods=['get'], url_path=r'labour/(?P<labour_id>[^/.]+)/stats')
    def labour_stats(self, request, labour_id=None):
        stats = aggregation.labour_rating_stats(labour_id)
        return APIResponse.success(RatingStatsSerializer(stats).data)

    @action(detail=False, methods=['get'], url_path=r'job/(?P<job_id>[^/.]+)')
    def job(self, request, job_id=None):
        rating = aggregation.rating_for_job(job_id)
        return APIResponse.success(RatingSerializer(rating).data)

    @action(detail=False, methods=['get'], url_path=r'client/(?P<client_id>[^/.]+)')
    def client(self, request, client_id=None):
        return self.paginated(aggregation.ratings_by_client(client_id))
