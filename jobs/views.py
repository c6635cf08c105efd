"""
Jobs API Views.

ViewSets:
- JobViewSet: posting, listing and every lifecycle transition of a job
- ApplicationViewSet: a worker's own applications, accept/reject by the client

Role checks are repeated inside JobLifecycleService; the permission classes
here only turn obviously wrong callers away early.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions
from rest_framework.decorators import action

from accounts.permissions import IsClient, IsLabour
from api.base import APIResponse, BaseViewSet
from ratings.serializers import RateJobSerializer, RatingSerializer

from . import queries
from .serializers import (
    ApplicationCreateSerializer,
    ApplicationFilterSerializer,
    JobApplicationSerializer,
    JobCreateSerializer,
    JobDetailSerializer,
    JobFilterSerializer,
    JobSerializer,
    MyApplicationSerializer,
)
from .services import JobLifecycleService

STATUS_PARAMETER = OpenApiParameter('status', str, description="Filter by status")


class LifecycleMixin:
    service_class = JobLifecycleService

    def get_service(self) -> JobLifecycleService:
        return self.service_class()


class JobViewSet(LifecycleMixin, BaseViewSet):
    """
    list:     jobs relevant to the caller (``?status=`` to filter)
    create:   post a job; the hourly rate is snapshotted from approved labour
    retrieve: one job
    """

    serializer_class = JobSerializer
    action_permissions = {
        'create': [permissions.IsAuthenticated, IsClient],
        'available': [permissions.IsAuthenticated, IsLabour],
        'work_done': [permissions.IsAuthenticated, IsClient],
        'payment_received': [permissions.IsAuthenticated, IsLabour],
        'rate': [permissions.IsAuthenticated, IsClient],
        'cancel': [permissions.IsAuthenticated, IsClient],
    }

    def get_queryset(self):
        return queries.jobs_for_user(self.request.user)

    @extend_schema(parameters=[STATUS_PARAMETER])
    def list(self, request):
        filters = JobFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        return self.paginated(
            queries.jobs_for_user(request.user, status=filters.validated_data.get('status'))
        )

    @extend_schema(request=JobCreateSerializer, responses=JobSerializer)
    def create(self, request):
        serializer = JobCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = self.get_service().create_job(request.user, **serializer.validated_data)
        return APIResponse.created(JobSerializer(job).data, message="Job created successfully.")

    @extend_schema(responses=JobDetailSerializer)
    def retrieve(self, request, pk=None):
        job = queries.job_for_user(request.user, pk)
        return APIResponse.success(JobDetailSerializer(job).data)

    @action(detail=False, methods=['get'])
    def available(self, request):
        """Open jobs matching the worker's categories and city."""
        return self.paginated(queries.available_jobs_for(request.user))

    @extend_schema(methods=['get'], parameters=[STATUS_PARAMETER], responses=JobApplicationSerializer(many=True))
    @extend_schema(methods=['post'], request=ApplicationCreateSerializer, responses=JobApplicationSerializer)
    @action(detail=True, methods=['get', 'post'])
    def applications(self, request, pk=None):
        """GET: the job's applications (its client only). POST: apply (approved labour)."""
        if request.method == 'POST':
            serializer = ApplicationCreateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            application = self.get_service().submit_application(
                request.user, pk, message=serializer.validated_data['message'],
            )
            return APIResponse.created(
                MyApplicationSerializer(application).data,
                message="Application submitted successfully.",
            )

        filters = ApplicationFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        return self.paginated(
            queries.applications_for_job(request.user, pk, status=filters.validated_data.get('status')),
            serializer_class=JobApplicationSerializer,
        )

    @extend_schema(request=None, responses=JobSerializer)
    @action(detail=True, methods=['patch'], url_path='work-done')
    def work_done(self, request, pk=None):
        job = self.get_service().mark_work_done(request.user, pk)
        return APIResponse.updated(JobSerializer(job).data, message="Work marked as done.")

    @extend_schema(request=None, responses=JobDetailSerializer)
    @action(detail=True, methods=['patch'], url_path='payment-received')
    def payment_received(self, request, pk=None):
        job = self.get_service().confirm_payment(request.user, pk)
        return APIResponse.updated(
            JobDetailSerializer(job).data,
            message="Payment confirmed. Job completed successfully.",
        )

    @extend_schema(request=RateJobSerializer)
    @action(detail=True, methods=['post'])
    def rate(self, request, pk=None):
        serializer = RateJobSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_service().rate_job(request.user, pk, **serializer.validated_data)
        return APIResponse.success(
            data={
                'job': JobSerializer(result.job).data,
                'rating': RatingSerializer(result.rating).data,
                'labour': {
                    'id': str(result.labour.pk),
                    'average_rating': result.labour.average_rating,
                    'rating_count': result.labour.rating_count,
                },
            },
            message="Rating submitted successfully.",
        )

    @extend_schema(request=None, responses=JobSerializer)
    @action(detail=True, methods=['patch'])
    def cancel(self, request, pk=None):
        job = self.get_service().cancel_job(request.user, pk)
        return APIResponse.updated(JobSerializer(job).data, message="Job cancelled.")


class ApplicationViewSet(LifecycleMixin, BaseViewSet):
    """
    list:   the calling worker's applications (``?status=`` to filter)
    accept: client accepts an application and the job starts
    reject: client declines an application
    """

    serializer_class = MyApplicationSerializer
    action_permissions = {
        'list': [permissions.IsAuthenticated, IsLabour],
        'accept': [permissions.IsAuthenticated, IsClient],
        'reject': [permissions.IsAuthenticated, IsClient],
    }

    def get_queryset(self):
        return queries.applications_for_labour(self.request.user)

    @extend_schema(parameters=[STATUS_PARAMETER])
    def list(self, request):
        filters = ApplicationFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        return self.paginated(
            queries.applications_for_labour(request.user, status=filters.validated_data.get('status'))
        )

    @extend_schema(request=None)
    @action(detail=True, methods=['patch'])
    def accept(self, request, pk=None):
        result = self.get_service().accept_application(request.user, pk)
        return APIResponse.updated(
            {
                'application': JobApplicationSerializer(result.application).data,
                'job': JobSerializer(result.job).data,
                'rejected_count': result.rejected_count,
            },
            message="Application accepted successfully.",
        )

    @extend_schema(request=None, responses=JobApplicationSerializer)
    @action(detail=True, methods=['patch'])
    def reject(self, request, pk=None):
        application = self.get_service().reject_application(request.user, pk)
        return APIResponse.updated(
            JobApplicationSerializer(application).data,
            message="Application rejected.",
        )
