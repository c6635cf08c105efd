"""
Rating aggregation and rating queries.

Each worker carries a running aggregate (total_rating, rating_count,
average_rating). apply_rating folds one new rating into it with a single
UPDATE built from F() expressions, so concurrent ratings for the same worker
cannot lose an increment and no rating history is rescanned.

The UPDATE relies on every right-hand side seeing the pre-update column
values, which holds on PostgreSQL and SQLite.
"""

import logging
from typing import Dict

from django.db.models import Count, F, FloatField
from django.db.models.functions import Cast

from api.exceptions import ResourceNotFoundError, get_object_or_not_found
from profiles.models import Client, Labour

from .models import Rating

logger = logging.getLogger(__name__)

RATING_VALUES = (1, 2, 3, 4, 5)
RECENT_COMMENTS_LIMIT = 3


def running_average(total: int, count: int) -> float:
    """Average of ``count`` ratings summing to ``total``; 0 when there are none."""
    if not count:
        return 0.0
    return total / count


def apply_rating(labour_id, value: int) -> None:
    """
    Fold ``value`` into the worker's aggregate.

    Must run inside the transaction that creates the Rating row.
    """
    updated = Labour.objects.filter(pk=labour_id).update(
        total_rating=F('total_rating') + value,
        rating_count=F('rating_count') + 1,
        average_rating=(
            Cast(F('total_rating') + value, FloatField())
            / Cast(F('rating_count') + 1, FloatField())
        ),
    )
    if not updated:
        raise ResourceNotFoundError('Labour', labour_id)

    logger.info(f"Rating {value} applied to labour {labour_id}")


# =============================================================================
# QUERIES
# =============================================================================

def ratings_for_labour(labour_id):
    """All ratings received by a worker, newest first."""
    labour = get_object_or_not_found(Labour.objects.all(), 'Labour', pk=labour_id)
    queryset = (
        Rating.objects.filter(labour=labour)
        .select_related('client', 'job')
        .order_by('-created_at', '-id')
    )
    return labour, queryset


def recent_comments(labour, limit: int = RECENT_COMMENTS_LIMIT):
    """The ``limit`` most recent ratings for ``labour`` that carry a comment."""
    return list(
        Rating.objects.filter(labour=labour)
        .exclude(comment='')
        .select_related('client')
        .order_by('-created_at', '-id')[:limit]
    )


def rating_distribution(labour) -> Dict[int, int]:
    """Histogram of a worker's ratings over 1-5; missing values count as 0."""
    distribution = {value: 0 for value in RATING_VALUES}
    rows = (
        Rating.objects.filter(labour=labour)
        .values('rating')
        .annotate(count=Count('id'))
        .order_by()
    )
    for row in rows:
        distribution[row['rating']] = row['count']
    return distribution


def labour_rating_stats(labour_id) -> Dict:
    labour = get_object_or_not_found(Labour.objects.all(), 'Labour', pk=labour_id)
    return {
        'labour_id': str(labour.pk),
        'average_rating': running_average(labour.total_rating, labour.rating_count),
        'total_ratings': labour.rating_count,
        'distribution': rating_distribution(labour),
    }


def rating_for_job(job_id) -> Rating:
    return get_object_or_not_found(
        Rating.objects.select_related('client', 'labour', 'job'),
        'Rating',
        job_id=job_id,
    )


def ratings_by_client(client_id):
    """Ratings a client has written, newest first."""
    client = get_object_or_not_found(Client.objects.all(), 'Client', pk=client_id)
    return (
        Rating.objects.filter(client=client)
        .select_related('labour', 'job')
        .order_by('-created_at', '-id')
    )
