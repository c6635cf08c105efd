"""
URL configuration for the LabourHub project.

/api/      - REST API (see api.urls for the endpoint list)
/admin/    - Django admin (category management, labour approval)
/health/   - Liveness and database check for load balancers
"""
import logging

from django.contrib import admin
from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from labourhub import __version__

logger = logging.getLogger(__name__)


def health_check(request):
    """Report whether the app can reach its database. 503 when it cannot."""
    try:
        connection.ensure_connection()
    except DatabaseError as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse(
            {'status': 'degraded', 'database': 'unreachable', 'version': __version__},
            status=503,
        )
    return JsonResponse({'status': 'healthy', 'database': 'connected', 'version': __version__})


urlpatterns = [
    path('health/', health_check, name='health_check'),
    path('admin/', admin.site.urls),
    path('api/', include('api.urls')),

    # OpenAPI schema and Swagger UI
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
