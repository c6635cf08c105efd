"""
LabourHub Test Configuration - pytest fixtures and factories

This module provides:
- factory_boy factories for users, profiles, categories, jobs and applications
- notifier doubles for observing (or breaking) notification delivery
- API clients authenticated as each role

RUNNING TESTS:
# Run all tests
pytest -v

# Run by app
pytest jobs/tests -v

# Run by marker
pytest -m workflow -v
pytest -m security -v

# Run the row-locking tests against PostgreSQL
TEST_DB_ENGINE=django.db.backends.postgresql pytest -m postgres -v
"""

import pytest

import factory
from factory.django import DjangoModelFactory

from notifications.services import BaseNotifier, NotificationResult


# ============================================================================
# USER FACTORIES
# ============================================================================

class UserFactory(DjangoModelFactory):
    """Factory for client users (email login)."""

    class Meta:
        model = 'accounts.User'
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    phone = None
    role = 'client'
    is_verified = True
    is_active = True

    @classmethod
    def _create(cls, model_class, *args, **kwargs):
        """Go through the manager so contact details are normalised and the password hashed."""
        password = kwargs.pop('password', 'testpass123')
        manager = cls._get_manager(model_class)
        return manager.create_user(*args, password=password, **kwargs)


class LabourUserFactory(UserFactory):
    """Factory for labour users (phone login)."""

    email = None
    phone = factory.Sequence(lambda n: f"+9198{n:08d}")
    role = 'labour'


class AdminUserFactory(UserFactory):
    """Factory for admin-role users."""

    email = factory.Sequence(lambda n: f"admin{n}@labourhub.local")
    role = 'admin'
    is_staff = True


# ============================================================================
# CATALOG AND PROFILE FACTORIES
# ============================================================================

class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = 'catalog.Category'

    name = factory.Sequence(lambda n: f"Category {n}")
    description = factory.Faker('sentence', nb_words=6)
    is_active = True


class ClientFactory(DjangoModelFactory):
    class Meta:
        model = 'profiles.Client'

    user = factory.SubFactory(UserFactory)
    name = factory.Faker('name')
    company = ''


class LabourFactory(DjangoModelFactory):
    """Approved worker in Hubli. Pass ``categories=[...]`` to attach categories."""

    class Meta:
        model = 'profiles.Labour'
        skip_postgeneration_save = True

    user = factory.SubFactory(LabourUserFactory)
    name = factory.Faker('name')
    hourly_rate = 150
    city = 'Hubli'
    approval_status = 'approved'

    @factory.post_generation
    def categories(self, create, extracted, **kwargs):
        if create and extracted:
            self.categories.set(extracted)


class PendingLabourFactory(LabourFactory):
    approval_status = 'pending'


# ============================================================================
# JOB FACTORIES
# ============================================================================

class JobFactory(DjangoModelFactory):
    """Open job. Non-open jobs need ``labour`` set."""

    class Meta:
        model = 'jobs.Job'

    client = factory.SubFactory(ClientFactory)
    category = factory.SubFactory(CategoryFactory)
    title = factory.Sequence(lambda n: f"Job {n}")
    description = factory.Faker('paragraph', nb_sentences=2)
    city = 'Hubli'
    hourly_rate = 175
    estimated_hours = 4
    status = 'open'
    labour = None


class JobApplicationFactory(DjangoModelFactory):
    class Meta:
        model = 'jobs.JobApplication'

    job = factory.SubFactory(JobFactory)
    labour = factory.SubFactory(LabourFactory)
    status = 'pending'
    message = ''


# ============================================================================
# NOTIFIER DOUBLES
# ============================================================================

class RecordingNotifier(BaseNotifier):
    """Keeps every message instead of delivering it."""

    channel_type = 'log'

    def __init__(self):
        self.sent = []

    def send(self, recipient, message, subject=None):
        self.sent.append({'recipient': recipient, 'message': message, 'subject': subject})
        return NotificationResult(success=True, channel_type=self.channel_type, recipient=recipient)

    def subjects(self):
        return [m['subject'] for m in self.sent]


class ExplodingNotifier(BaseNotifier):
    """Raises on every send, like an SMS gateway that is down."""

    channel_type = 'sms'

    def send(self, recipient, message, subject=None):
        raise ConnectionError("SMS gateway unreachable")


# ============================================================================
# PYTEST FIXTURES
# ============================================================================

@pytest.fixture
def user_factory(db):
    """Provide UserFactory for tests."""
    return UserFactory


@pytest.fixture
def labour_factory(db):
    """Provide LabourFactory for tests."""
    return LabourFactory


@pytest.fixture
def job_factory(db):
    """Provide JobFactory for tests."""
    return JobFactory


@pytest.fixture
def category(db):
    return CategoryFactory(name='Plumbing')


@pytest.fixture
def client_profile(db):
    return ClientFactory(name='Test Client')


@pytest.fixture
def other_client_profile(db):
    return ClientFactory(name='Other Client')


@pytest.fixture
def labour_profile(db, category):
    return LabourFactory(name='Ravi Kumar', categories=[category], hourly_rate=150)


@pytest.fixture
def second_labour_profile(db, category):
    return LabourFactory(name='Suresh Patel', categories=[category], hourly_rate=200)


@pytest.fixture
def pending_labour_profile(db, category):
    return PendingLabourFactory(name='Amit Singh', categories=[category], hourly_rate=120)


@pytest.fixture
def admin_account(db):
    return AdminUserFactory()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def lifecycle(notifier):
    """JobLifecycleService wired to a RecordingNotifier."""
    from jobs.services import JobLifecycleService
    return JobLifecycleService(notifier=notifier)


@pytest.fixture
def api_client(db):
    """Provide a DRF API test client."""
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def api_client_for(db):
    """Build a DRF API client authenticated as the given user."""
    from rest_framework.test import APIClient

    def _build(user):
        api_client = APIClient()
        api_client.force_authenticate(user=user)
        return api_client

    return _build
