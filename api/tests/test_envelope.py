"""
Tests for the response envelope: error rendering and pagination.
"""

import pytest
from django.urls import reverse
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError

from api.exceptions import (
    AlreadyRatedError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ResourceStateError,
    labourhub_exception_handler,
)


class TestExceptionHandler:

    def test_domain_error_envelope(self):
        response = labourhub_exception_handler(
            ResourceStateError(current_state='open', required_state='completed'), {}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['data'] is None
        assert response.data['error_code'] == 'STATE_CONFLICT'
        assert response.data['message'] == "Resource is in 'open' state. Required state: 'completed'."
        assert response.data['meta']['current_state'] == 'open'
        assert 'timestamp' in response.data['meta']

    def test_subclass_keeps_its_code_and_default_message(self):
        response = labourhub_exception_handler(AlreadyRatedError(current_state='completed'), {})

        assert response.data['error_code'] == 'ALREADY_RATED'
        assert response.data['message'] == 'This job has already been rated.'
        assert response.data['meta']['current_state'] == 'completed'

    def test_not_found_and_forbidden(self):
        not_found = labourhub_exception_handler(ResourceNotFoundError('Job'), {})
        forbidden = labourhub_exception_handler(PermissionDeniedError(), {})

        assert not_found.status_code == status.HTTP_404_NOT_FOUND
        assert not_found.data['message'] == 'Job not found.'
        assert forbidden.status_code == status.HTTP_403_FORBIDDEN
        assert forbidden.data['error_code'] == 'PERMISSION_DENIED'

    def test_field_validation_errors(self):
        response = labourhub_exception_handler(
            ValidationError({'hourly_rate': ['Ensure this value is less than or equal to 2000.']}), {}
        )

        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert response.data['errors'] == [{
            'field': 'hourly_rate',
            'messages': ['Ensure this value is less than or equal to 2000.'],
        }]

    def test_non_field_validation_errors(self):
        response = labourhub_exception_handler(ValidationError(['Bad request.']), {})

        assert response.data['message'] == 'Bad request.'
        assert response.data['errors'][0]['field'] == 'non_field_errors'

    def test_drf_errors_keep_their_status(self):
        response = labourhub_exception_handler(NotAuthenticated(), {})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error_code'] == 'NOT_AUTHENTICATED'

    def test_unexpected_errors_become_500(self):
        response = labourhub_exception_handler(ZeroDivisionError('oops'), {})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error_code'] == 'INTERNAL_ERROR'
        assert 'oops' not in response.data['message']


@pytest.mark.django_db
class TestPagination:

    @pytest.fixture
    def categories(self):
        from conftest import CategoryFactory

        return CategoryFactory.create_batch(12)

    def test_default_page(self, api_client, categories):
        response = api_client.get(reverse('api:category-list'))

        assert len(response.data['data']) == 10
        assert response.data['meta']['pagination'] == {'current': 1, 'limit': 10, 'total': 12, 'pages': 2}

    def test_page_and_limit(self, api_client, categories):
        response = api_client.get(reverse('api:category-list'), {'page': 3, 'limit': 5})

        assert len(response.data['data']) == 2
        assert response.data['meta']['pagination'] == {'current': 3, 'limit': 5, 'total': 12, 'pages': 3}

    def test_limit_is_capped(self, api_client, categories):
        response = api_client.get(reverse('api:category-list'), {'limit': 500})

        assert response.data['meta']['pagination']['limit'] == 50

    def test_page_past_the_end(self, api_client, categories):
        response = api_client.get(reverse('api:category-list'), {'page': 9})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['data'] == []
        assert response.data['meta']['pagination'] == {'current': 9, 'limit': 10, 'total': 12, 'pages': 2}

    @pytest.mark.parametrize('page', ['0', '-1', 'abc'])
    def test_invalid_page_number(self, api_client, categories, page):
        response = api_client.get(reverse('api:category-list'), {'page': page})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'VALIDATION_ERROR'
        assert response.data['errors'][0]['field'] == 'page'


@pytest.mark.django_db
class TestHealthCheck:

    def test_health(self, client):
        response = client.get('/health/')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
