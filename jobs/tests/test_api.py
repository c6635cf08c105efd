"""
Tests for the jobs and applications endpoints.

Covers the HTTP status codes and envelopes of every job route, and the
per-role visibility rules of listings and job detail.
"""

import pytest
from django.urls import reverse
from rest_framework import status

from jobs.models import Job, JobApplication


@pytest.fixture
def open_job(lifecycle, client_profile, category, labour_profile):
    return lifecycle.create_job(
        client_profile.user, category=category, title='Paint bedroom',
        description='Two coats', city='Hubli', estimated_hours=3,
    )


@pytest.fixture
def application(lifecycle, open_job, labour_profile):
    return lifecycle.submit_application(labour_profile.user, open_job.pk)


# =============================================================================
# POSTING AND LISTING
# =============================================================================

@pytest.mark.django_db
class TestJobPosting:

    def test_client_posts_job(self, api_client_for, client_profile, category, labour_profile, second_labour_profile):
        response = api_client_for(client_profile.user).post(reverse('api:job-list'), {
            'category': str(category.pk),
            'title': 'Fix kitchen sink',
            'description': 'Leaking pipe',
            'city': 'Hubli',
            'estimated_hours': 4,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.data['data']
        assert data['hourly_rate'] == 175
        assert data['estimated_cost'] == 700
        assert data['status'] == 'open'
        assert data['labour'] is None

    def test_no_eligible_labour(self, api_client_for, client_profile, category):
        response = api_client_for(client_profile.user).post(reverse('api:job-list'), {
            'category': str(category.pk), 'title': 'x', 'description': 'y',
            'city': 'Dharwad', 'estimated_hours': 1,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'NO_ELIGIBLE_LABOUR'

    def test_inactive_category_is_invalid(self, api_client_for, client_profile, category, labour_profile):
        category.is_active = False
        category.save()

        response = api_client_for(client_profile.user).post(reverse('api:job-list'), {
            'category': str(category.pk), 'title': 'x', 'description': 'y',
            'city': 'Hubli', 'estimated_hours': 1,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors'][0]['field'] == 'category'

    def test_labour_cannot_post(self, api_client_for, labour_profile, category):
        response = api_client_for(labour_profile.user).post(reverse('api:job-list'), {
            'category': str(category.pk), 'title': 'x', 'description': 'y',
            'city': 'Hubli', 'estimated_hours': 1,
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_is_unauthorised(self, api_client):
        assert api_client.get(reverse('api:job-list')).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestJobListing:

    def test_client_sees_own_jobs(self, api_client_for, open_job, other_client_profile, client_profile):
        own = api_client_for(client_profile.user).get(reverse('api:job-list'))
        other = api_client_for(other_client_profile.user).get(reverse('api:job-list'))

        assert [j['id'] for j in own.data['data']] == [str(open_job.pk)]
        assert other.data['data'] == []

    def test_status_filter(self, api_client_for, client_profile, open_job):
        api_client = api_client_for(client_profile.user)

        assert len(api_client.get(reverse('api:job-list'), {'status': 'open'}).data['data']) == 1
        assert api_client.get(reverse('api:job-list'), {'status': 'completed'}).data['data'] == []
        assert api_client.get(
            reverse('api:job-list'), {'status': 'bogus'}
        ).status_code == status.HTTP_400_BAD_REQUEST

    def test_labour_sees_assigned_jobs_only(self, api_client_for, lifecycle, client_profile, application,
                                            labour_profile, open_job):
        api_client = api_client_for(labour_profile.user)
        assert api_client.get(reverse('api:job-list')).data['data'] == []

        lifecycle.accept_application(client_profile.user, application.pk)

        rows = api_client.get(reverse('api:job-list')).data['data']
        assert [(j['id'], j['status']) for j in rows] == [(str(open_job.pk), 'in_progress')]

    def test_available_matches_category_and_city(self, api_client_for, labour_profile, open_job, client_profile):
        from conftest import CategoryFactory, JobFactory

        JobFactory(client=client_profile, category=open_job.category, city='Dharwad')
        JobFactory(client=client_profile, category=CategoryFactory(name='Gardening'))

        response = api_client_for(labour_profile.user).get(reverse('api:job-available'))

        assert response.status_code == status.HTTP_200_OK
        assert [j['id'] for j in response.data['data']] == [str(open_job.pk)]

    def test_available_is_labour_only(self, api_client_for, client_profile):
        response = api_client_for(client_profile.user).get(reverse('api:job-available'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestJobDetail:

    def test_owner_and_approved_labour_see_open_job(self, api_client_for, open_job, client_profile,
                                                    second_labour_profile):
        url = reverse('api:job-detail', args=[open_job.pk])

        assert api_client_for(client_profile.user).get(url).status_code == status.HTTP_200_OK
        assert api_client_for(second_labour_profile.user).get(url).status_code == status.HTTP_200_OK

    def test_hidden_from_others(self, api_client_for, open_job, other_client_profile, pending_labour_profile):
        url = reverse('api:job-detail', args=[open_job.pk])

        assert api_client_for(other_client_profile.user).get(url).status_code == status.HTTP_404_NOT_FOUND
        assert api_client_for(pending_labour_profile.user).get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_started_job_hidden_from_unassigned_labour(self, api_client_for, lifecycle, client_profile,
                                                       application, open_job, second_labour_profile,
                                                       labour_profile):
        lifecycle.accept_application(client_profile.user, application.pk)
        url = reverse('api:job-detail', args=[open_job.pk])

        assert api_client_for(labour_profile.user).get(url).status_code == status.HTTP_200_OK
        assert api_client_for(second_labour_profile.user).get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_unknown_job(self, api_client_for, client_profile):
        response = api_client_for(client_profile.user).get(reverse('api:job-detail', args=['missing']))

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# APPLICATIONS
# =============================================================================

@pytest.mark.django_db
class TestApplicationsAPI:

    def test_apply(self, api_client_for, open_job, labour_profile):
        response = api_client_for(labour_profile.user).post(
            reverse('api:job-applications', args=[open_job.pk]),
            {'message': 'I can come tomorrow'},
            format='json',
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['status'] == 'pending'
        assert response.data['data']['job']['id'] == str(open_job.pk)

    def test_apply_twice(self, api_client_for, application, open_job, labour_profile):
        response = api_client_for(labour_profile.user).post(
            reverse('api:job-applications', args=[open_job.pk]), {}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'ALREADY_APPLIED'
        assert response.data['message'] == 'You have already applied for this job.'
        assert response.data['meta']['current_state'] == 'open'

    def test_pending_labour_is_forbidden(self, api_client_for, open_job, pending_labour_profile):
        response = api_client_for(pending_labour_profile.user).post(
            reverse('api:job-applications', args=[open_job.pk]), {}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error_code'] == 'LABOUR_NOT_APPROVED'

    def test_client_lists_applications(self, api_client_for, application, open_job, client_profile):
        response = api_client_for(client_profile.user).get(
            reverse('api:job-applications', args=[open_job.pk])
        )

        assert response.status_code == status.HTTP_200_OK
        row = response.data['data'][0]
        assert row['labour']['name'] == 'Ravi Kumar'
        assert row['labour']['phone'] == str(application.labour.user.phone)

    def test_other_client_cannot_list_applications(self, api_client_for, application, open_job,
                                                   other_client_profile):
        response = api_client_for(other_client_profile.user).get(
            reverse('api:job-applications', args=[open_job.pk])
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_labour_lists_own_applications(self, api_client_for, application, labour_profile):
        response = api_client_for(labour_profile.user).get(reverse('api:application-list'), {'status': 'pending'})

        assert [a['id'] for a in response.data['data']] == [str(application.pk)]

    def test_accept_returns_job_and_rejected_count(self, api_client_for, lifecycle, application, open_job,
                                                   client_profile, second_labour_profile):
        lifecycle.submit_application(second_labour_profile.user, open_job.pk)

        response = api_client_for(client_profile.user).patch(
            reverse('api:application-accept', args=[application.pk])
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.data['data']
        assert data['application']['status'] == 'accepted'
        assert data['job']['status'] == 'in_progress'
        assert data['job']['labour']['name'] == 'Ravi Kumar'
        assert data['rejected_count'] == 1

    def test_accept_twice_is_a_state_conflict(self, api_client_for, application, client_profile):
        url = reverse('api:application-accept', args=[application.pk])
        api_client = api_client_for(client_profile.user)

        api_client.patch(url)
        response = api_client.patch(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'STATE_CONFLICT'

    def test_other_client_cannot_accept(self, api_client_for, application, other_client_profile):
        response = api_client_for(other_client_profile.user).patch(
            reverse('api:application-accept', args=[application.pk])
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        application.refresh_from_db()
        assert application.status == JobApplication.Status.PENDING

    def test_reject(self, api_client_for, application, client_profile):
        response = api_client_for(client_profile.user).patch(
            reverse('api:application-reject', args=[application.pk])
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['status'] == 'rejected'


# =============================================================================
# COMPLETION AND RATING
# =============================================================================

@pytest.mark.django_db
@pytest.mark.workflow
class TestCompletionAPI:

    @pytest.fixture
    def started_job(self, lifecycle, client_profile, application):
        return lifecycle.accept_application(client_profile.user, application.pk).job

    def test_work_done_then_payment(self, api_client_for, started_job, client_profile, labour_profile):
        done = api_client_for(client_profile.user).patch(reverse('api:job-work-done', args=[started_job.pk]))
        paid = api_client_for(labour_profile.user).patch(
            reverse('api:job-payment-received', args=[started_job.pk])
        )

        assert done.status_code == status.HTTP_200_OK
        assert done.data['data']['status'] == 'awaiting_completion'
        assert paid.status_code == status.HTTP_200_OK
        assert paid.data['data']['status'] == 'completed'
        assert paid.data['data']['settlement']['amount'] == 450

    def test_payment_before_work_done(self, api_client_for, started_job, labour_profile):
        response = api_client_for(labour_profile.user).patch(
            reverse('api:job-payment-received', args=[started_job.pk])
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['meta']['current_state'] == 'in_progress'
        assert response.data['meta']['required_state'] == 'awaiting_completion'

    def test_labour_cannot_mark_work_done(self, api_client_for, started_job, labour_profile):
        response = api_client_for(labour_profile.user).patch(reverse('api:job-work-done', args=[started_job.pk]))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_rate(self, api_client_for, lifecycle, started_job, client_profile, labour_profile):
        lifecycle.mark_work_done(client_profile.user, started_job.pk)
        lifecycle.confirm_payment(labour_profile.user, started_job.pk)
        url = reverse('api:job-rate', args=[started_job.pk])
        api_client = api_client_for(client_profile.user)

        first = api_client.post(url, {'rating': 4, 'comment': 'Neat work'}, format='json')
        second = api_client.post(url, {'rating': 1}, format='json')

        assert first.status_code == status.HTTP_200_OK
        assert first.data['data']['rating']['rating'] == 4
        assert first.data['data']['labour'] == {
            'id': str(labour_profile.pk), 'average_rating': 4.0, 'rating_count': 1,
        }
        assert second.status_code == status.HTTP_400_BAD_REQUEST
        assert second.data['error_code'] == 'ALREADY_RATED'
        assert second.data['message'] == 'This job has already been rated.'

    @pytest.mark.parametrize('value', [0, 6])
    def test_rating_out_of_range(self, api_client_for, started_job, client_profile, value):
        response = api_client_for(client_profile.user).post(
            reverse('api:job-rate', args=[started_job.pk]), {'rating': value}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error_code'] == 'VALIDATION_ERROR'

    def test_cancel_open_job(self, api_client_for, open_job, client_profile):
        response = api_client_for(client_profile.user).patch(reverse('api:job-cancel', args=[open_job.pk]))

        assert response.status_code == status.HTTP_200_OK
        assert Job.objects.get(pk=open_job.pk).status == Job.Status.CANCELLED
