"""
Profiles API Views.

- LabourSignupView / ClientSignupView: create an account plus profile and
  return JWT tokens
- MeView: the current user with whichever profile they have
- LabourViewSet: public worker browsing, admin approval queue and decision
"""

import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, views
from rest_framework.decorators import action

from accounts.authentication import issue_tokens
from accounts.permissions import IsAdminRole
from accounts.serializers import UserSerializer
from api.base import APIResponse, BaseViewSet

from . import queries
from .filters import LabourFilter
from .models import Client, Labour
from .serializers import (
    ApprovalDecisionSerializer,
    ClientSerializer,
    ClientSignupSerializer,
    LabourAdminSerializer,
    LabourDetailSerializer,
    LabourListSerializer,
    LabourSignupSerializer,
)
from .services import LabourApprovalService, register_client, register_labour

logger = logging.getLogger(__name__)


class LabourSignupView(views.APIView):
    """
    POST: Register a worker with a phone OTP. The profile starts pending.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=LabourSignupSerializer)
    def post(self, request):
        serializer = LabourSignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        labour = register_labour(**serializer.validated_data)

        return APIResponse.created(
            data={
                'user': UserSerializer(labour.user).data,
                'labour': LabourAdminSerializer(labour).data,
                'tokens': issue_tokens(labour.user),
            },
            message="Labour registered successfully. Awaiting admin approval.",
        )


class ClientSignupView(views.APIView):
    """
    POST: Register a client with email and password.
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(request=ClientSignupSerializer)
    def post(self, request):
        serializer = ClientSignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = register_client(**serializer.validated_data)

        return APIResponse.created(
            data={
                'user': UserSerializer(client.user).data,
                'client': ClientSerializer(client).data,
                'tokens': issue_tokens(client.user),
            },
            message="Client registered successfully.",
        )


class MeView(views.APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        data = {'user': UserSerializer(user).data}

        labour = Labour.objects.filter(user=user).prefetch_related('categories').first()
        if labour is not None:
            data['labour'] = LabourAdminSerializer(labour).data

        client = Client.objects.filter(user=user).first()
        if client is not None:
            data['client'] = ClientSerializer(client).data

        return APIResponse.success(data)


class LabourViewSet(BaseViewSet):
    """
    list:     approved workers, best rated first (``?category=&city=``)
    retrieve: one worker with their latest ratings
    pending:  approval queue (admin)
    approval: approve or reject a pending worker (admin)
    """

    serializer_class = LabourListSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = LabourFilter
    action_permissions = {
        'list': [permissions.AllowAny],
        'retrieve': [permissions.AllowAny],
        'pending': [permissions.IsAuthenticated, IsAdminRole],
        'approval': [permissions.IsAuthenticated, IsAdminRole],
    }

    def get_queryset(self):
        return queries.approved_labour()

    def list(self, request):
        return self.paginated(self.filter_queryset(self.get_queryset()))

    @extend_schema(responses=LabourDetailSerializer)
    def retrieve(self, request, pk=None):
        labour = queries.labour_detail(pk, viewer=request.user)
        return APIResponse.success(LabourDetailSerializer(labour).data)

    @extend_schema(responses=LabourAdminSerializer(many=True))
    @action(detail=False, methods=['get'])
    def pending(self, request):
        return self.paginated(queries.pending_labour(), serializer_class=LabourAdminSerializer)

    @extend_schema(request=ApprovalDecisionSerializer, responses=LabourAdminSerializer)
    @action(detail=True, methods=['patch'])
    def approval(self, request, pk=None):
        serializer = ApprovalDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        approve = serializer.validated_data['is_approved']

        labour = LabourApprovalService().decide(request.user, pk, approve=approve)
        return APIResponse.updated(
            LabourAdminSerializer(labour).data,
            message=f"Labour {'approved' if approve else 'rejected'} successfully.",
        )
