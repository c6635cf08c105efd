"""
Tests for the profiles app.

This module tests:
1. Labour and client signup
2. The one-shot approval gate
3. Public labour browsing
"""

import pytest
from django.urls import reverse
from rest_framework import status

from accounts.models import OneTimePassword, User
from accounts.otp import OTPService
from api.exceptions import (
    InvalidOTPError,
    PermissionDeniedError,
    ResourceAlreadyExistsError,
    ResourceStateError,
)
from profiles.models import Labour
from profiles.services import LabourApprovalService, register_client, register_labour


# =============================================================================
# SIGNUP
# =============================================================================

@pytest.mark.django_db
class TestLabourSignup:

    def _otp(self, phone='9876543230'):
        return OTPService(notifier=None).issue(phone)

    def test_signup_creates_pending_verified_labour(self, category):
        otp = self._otp()

        labour = register_labour(
            phone='9876543230', otp=otp.code, password='labour123', name='Ravi',
            categories=[category], hourly_rate=150, city='Hubli',
        )

        assert labour.approval_status == Labour.ApprovalStatus.PENDING
        assert labour.is_approved is False
        assert labour.user.role == User.Role.LABOUR
        assert labour.user.is_verified is True
        assert list(labour.categories.all()) == [category]
        otp.refresh_from_db()
        assert otp.is_used is True

    def test_bad_otp_creates_nothing(self, category):
        self._otp()

        with pytest.raises(InvalidOTPError):
            register_labour(
                phone='9876543230', otp='9999' if OneTimePassword.objects.get().code != '9999' else '8888',
                password='labour123', name='Ravi', categories=[category], hourly_rate=150, city='Hubli',
            )

        assert not User.objects.exists()

    def test_signup_api_returns_tokens(self, api_client, category):
        otp = self._otp()

        response = api_client.post(reverse('api:labour-signup'), {
            'phone': '+91 98765 43230',
            'otp': otp.code,
            'password': 'labour123',
            'name': 'Ravi Kumar',
            'categories': [str(category.pk)],
            'hourly_rate': 150,
            'city': 'Hubli',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.data['data']
        assert data['labour']['approval_status'] == 'pending'
        assert data['user']['phone'] == '+919876543230'
        assert set(data['tokens']) == {'refresh', 'access'}

    @pytest.mark.parametrize('field, value', [
        ('hourly_rate', 49),
        ('hourly_rate', 2001),
        ('city', 'Bengaluru'),
        ('categories', []),
    ])
    def test_signup_validation(self, api_client, category, field, value):
        payload = {
            'phone': '9876543230', 'otp': '1234', 'password': 'labour123', 'name': 'Ravi',
            'categories': [str(category.pk)], 'hourly_rate': 150, 'city': 'Hubli',
        }
        payload[field] = value

        response = api_client.post(reverse('api:labour-signup'), payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == field


@pytest.mark.django_db
class TestClientSignup:

    def test_register_client_sends_welcome_email(self, notifier, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            client = register_client(
                email='client@example.com', password='client123', name='Test Client',
                company='Test Co', notifier=notifier,
            )

        assert client.user.role == User.Role.CLIENT
        assert client.user.is_verified is True
        assert notifier.sent[0]['recipient'] == 'client@example.com'
        assert notifier.sent[0]['subject'] == 'Welcome to LabourHub'

    def test_duplicate_email_or_phone(self, notifier):
        register_client(email='client@example.com', phone='9876543210', password='client123',
                        name='A', notifier=notifier)

        with pytest.raises(ResourceAlreadyExistsError):
            register_client(email='CLIENT@example.com', password='client123', name='B', notifier=notifier)
        with pytest.raises(ResourceAlreadyExistsError):
            register_client(email='other@example.com', phone='+919876543210', password='client123',
                            name='C', notifier=notifier)

    def test_signup_api(self, api_client):
        response = api_client.post(reverse('api:client-signup'), {
            'email': 'Client@Example.com',
            'password': 'client123',
            'name': 'Test Client',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['user']['email'] == 'client@example.com'
        assert response.data['data']['client']['name'] == 'Test Client'

    def test_short_password_rejected(self, api_client):
        response = api_client.post(reverse('api:client-signup'), {
            'email': 'client@example.com', 'password': '123', 'name': 'Test Client',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_me_returns_profile(self, api_client_for, client_profile, labour_profile):
        client_data = api_client_for(client_profile.user).get(reverse('api:me')).data['data']
        labour_data = api_client_for(labour_profile.user).get(reverse('api:me')).data['data']

        assert client_data['client']['name'] == 'Test Client'
        assert 'labour' not in client_data
        assert labour_data['labour']['categories'][0]['name'] == 'Plumbing'


# =============================================================================
# APPROVAL GATE
# =============================================================================

@pytest.mark.django_db
class TestApprovalGate:

    def test_approve_once(self, admin_account, pending_labour_profile, notifier):
        service = LabourApprovalService(notifier=notifier)

        labour = service.approve(admin_account, pending_labour_profile.pk)

        assert labour.is_approved
        assert labour.reviewed_by == admin_account
        assert labour.reviewed_at is not None

    def test_second_decision_fails_and_changes_nothing(self, admin_account, pending_labour_profile, notifier):
        service = LabourApprovalService(notifier=notifier)
        service.reject(admin_account, pending_labour_profile.pk)

        with pytest.raises(ResourceStateError):
            service.approve(admin_account, pending_labour_profile.pk)

        pending_labour_profile.refresh_from_db()
        assert pending_labour_profile.approval_status == Labour.ApprovalStatus.REJECTED

    def test_only_admins_decide(self, client_profile, pending_labour_profile, notifier):
        with pytest.raises(PermissionDeniedError):
            LabourApprovalService(notifier=notifier).approve(client_profile.user, pending_labour_profile.pk)

    def test_decision_notifies_worker(self, admin_account, pending_labour_profile, notifier,
                                      django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            LabourApprovalService(notifier=notifier).approve(admin_account, pending_labour_profile.pk)

        assert notifier.sent[0]['recipient'] == str(pending_labour_profile.user.phone)

    def test_approval_api(self, api_client_for, admin_account, pending_labour_profile):
        url = reverse('api:labour-approval', args=[pending_labour_profile.pk])
        api_client = api_client_for(admin_account)

        first = api_client.patch(url, {'is_approved': True}, format='json')
        second = api_client.patch(url, {'is_approved': False}, format='json')

        assert first.status_code == status.HTTP_200_OK
        assert first.data['message'] == 'Labour approved successfully.'
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data['error_code'] == 'STATE_CONFLICT'

    def test_approval_api_requires_admin(self, api_client_for, client_profile, pending_labour_profile):
        response = api_client_for(client_profile.user).patch(
            reverse('api:labour-approval', args=[pending_labour_profile.pk]),
            {'is_approved': True},
            format='json',
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_pending_queue(self, api_client_for, admin_account, pending_labour_profile, labour_profile):
        response = api_client_for(admin_account).get(reverse('api:labour-pending'))

        assert response.status_code == status.HTTP_200_OK
        assert [row['id'] for row in response.data['data']] == [str(pending_labour_profile.pk)]


# =============================================================================
# BROWSING
# =============================================================================

@pytest.mark.django_db
class TestLabourListing:

    def test_only_approved_sorted_by_rating(self, api_client, category, pending_labour_profile):
        from conftest import LabourFactory

        low = LabourFactory(categories=[category], average_rating=3.0, total_rating=3, rating_count=1)
        high = LabourFactory(categories=[category], average_rating=4.5, total_rating=9, rating_count=2)

        response = api_client.get(reverse('api:labour-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [row['id'] for row in response.data['data']] == [str(high.pk), str(low.pk)]

    def test_filter_by_category_and_city(self, api_client, category):
        from conftest import CategoryFactory, LabourFactory

        other = CategoryFactory(name='Painting')
        hubli = LabourFactory(categories=[category], city='Hubli')
        LabourFactory(categories=[category], city='Dharwad')
        LabourFactory(categories=[other], city='Hubli')

        response = api_client.get(reverse('api:labour-list'), {'category': str(category.pk), 'city': 'hubli'})

        assert [row['id'] for row in response.data['data']] == [str(hubli.pk)]

    def test_listing_includes_three_recent_comments(self, api_client, labour_profile):
        from conftest import JobFactory
        from ratings.models import Rating

        for value, comment in [(5, 'first'), (4, ''), (3, 'second'), (5, 'third'), (4, 'fourth')]:
            job = JobFactory(labour=labour_profile, status='completed')
            Rating.objects.create(job=job, client=job.client, labour=labour_profile, rating=value, comment=comment)

        response = api_client.get(reverse('api:labour-list'))

        comments = response.data['data'][0]['recent_comments']
        assert [c['comment'] for c in comments] == ['fourth', 'third', 'second']

    def test_unapproved_detail_is_hidden(self, api_client, pending_labour_profile, labour_profile):
        hidden = api_client.get(reverse('api:labour-detail', args=[pending_labour_profile.pk]))
        visible = api_client.get(reverse('api:labour-detail', args=[labour_profile.pk]))

        assert hidden.status_code == status.HTTP_404_NOT_FOUND
        assert visible.status_code == status.HTTP_200_OK
        assert visible.data['data']['recent_ratings'] == []
