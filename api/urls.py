"""
API URLs - every LabourHub endpoint lives under /api/.

Authentication:
- POST /api/auth/labour/request-otp/ - Send signup OTP to a phone
- POST /api/auth/labour/signup/ - Register labour (pending approval)
- POST /api/auth/client/signup/ - Register client
- POST /api/auth/login/ - Email or phone + password, returns JWT tokens
- POST /api/auth/token/refresh/ - Refresh access token
- GET  /api/auth/me/ - Current user and profile

Catalog:
- GET  /api/categories/ - Active categories (public)
- POST /api/categories/ - Create category (admin)
- PATCH/DELETE /api/categories/{id}/ - Update / deactivate (admin)

Jobs:
- GET  /api/jobs/ - My jobs
- POST /api/jobs/ - Post a job (client)
- GET  /api/jobs/available/ - Open jobs for my categories and city (labour)
- GET  /api/jobs/{id}/ - Job detail
- GET/POST /api/jobs/{id}/applications/ - Applications (client) / apply (labour)
- PATCH /api/jobs/{id}/work-done/ - Client marks work done
- PATCH /api/jobs/{id}/payment-received/ - Labour confirms payment
- POST /api/jobs/{id}/rate/ - Client rates the completed job
- PATCH /api/jobs/{id}/cancel/ - Client cancels an open job

Applications:
- GET   /api/applications/ - My applications (labour)
- PATCH /api/applications/{id}/accept/ - Accept (client)
- PATCH /api/applications/{id}/reject/ - Reject (client)

Labour:
- GET   /api/labour/ - Approved labour, best rated first (public)
- GET   /api/labour/{id}/ - Labour detail (public)
- GET   /api/labour/pending/ - Approval queue (admin)
- PATCH /api/labour/{id}/approval/ - Approve or reject (admin)

Ratings:
- GET /api/ratings/labour/{id}/ - Ratings for a worker
- GET /api/ratings/labour/{id}/stats/ - Rating statistics
- GET /api/ratings/job/{id}/ - Rating for a job
- GET /api/ratings/client/{id}/ - Ratings written by a client
"""

from django.urls import include, path
from rest_framework_simplejwt.views import TokenRefreshView

from profiles.urls import auth_urlpatterns as profile_auth_urlpatterns

app_name = 'api'

auth_urlpatterns = [
    path('', include('accounts.urls')),
    path('', include(profile_auth_urlpatterns)),
    path('token/refresh/', TokenRefreshView.as_view(), name='token-refresh'),
]

urlpatterns = [
    path('auth/', include(auth_urlpatterns)),
    path('', include('catalog.urls')),
    path('', include('jobs.urls')),
    path('', include('profiles.urls')),
    path('', include('ratings.urls')),
]
