"""
Read-only job and application listings.

Nothing here writes; status changes live in jobs.services.
"""

from accounts.models import User
from api.exceptions import PermissionDeniedError, ResourceNotFoundError, get_object_or_not_found
from profiles.models import Client, Labour
from profiles.queries import get_labour_profile

from .models import Job, JobApplication

NEWEST_FIRST = ('-created_at', '-id')


def _jobs():
    return Job.objects.select_related('client', 'labour', 'category').order_by(*NEWEST_FIRST)


def jobs_for_user(user, status=None):
    """
    Jobs relevant to ``user``.

    Clients see the jobs they posted. Labour sees jobs assigned to them, which
    leaves out ``open`` jobs unless ``status`` asks for them. Admins see every
    job. Users without a profile get an empty list.
    """
    queryset = _jobs()

    if user.role == User.Role.CLIENT:
        queryset = queryset.filter(client__user=user)
    elif user.role == User.Role.LABOUR:
        queryset = queryset.filter(labour__user=user)
        if not status:
            queryset = queryset.exclude(status=Job.Status.OPEN)
    elif not user.is_admin_role:
        return queryset.none()

    if status:
        queryset = queryset.filter(status=status)
    return queryset


def available_jobs_for(user):
    """Open jobs in the worker's categories and city, newest first."""
    labour = get_labour_profile(user)
    return (
        _jobs()
        .filter(
            status=Job.Status.OPEN,
            city=labour.city,
            category__in=labour.categories.all(),
        )
    )


def job_for_user(user, job_id) -> Job:
    """
    A single job as seen by ``user``.

    Visible to its client, its assigned worker, admins, and approved workers
    while it is open. Anyone else gets 404.
    """
    job = get_object_or_not_found(_jobs(), 'Job', pk=job_id)

    if user.is_admin_role:
        return job
    if Client.objects.filter(user=user, pk=job.client_id).exists():
        return job

    labour = Labour.objects.filter(user=user).first()
    if labour is not None:
        if job.labour_id == labour.pk:
            return job
        if job.status == Job.Status.OPEN and labour.is_approved:
            return job

    raise ResourceNotFoundError('Job')


def applications_for_job(user, job_id, status=None):
    """Applications for a job, newest first. Only the job's client and admins may look."""
    job = get_object_or_not_found(Job.objects.select_related('client'), 'Job', pk=job_id)
    if not user.is_admin_role and job.client.user_id != user.pk:
        raise PermissionDeniedError(detail="Only the client who posted this job can view its applications.")

    queryset = (
        JobApplication.objects.filter(job=job)
        .select_related('labour__user')
        .prefetch_related('labour__categories')
        .order_by(*NEWEST_FIRST)
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def applications_for_labour(user, status=None):
    """The worker's own applications, newest first."""
    labour = get_labour_profile(user)
    queryset = (
        JobApplication.objects.filter(labour=labour)
        .select_related('job__category', 'job__client')
        .order_by(*NEWEST_FIRST)
    )
    if status:
        queryset = queryset.filter(status=status)
    return queryset
