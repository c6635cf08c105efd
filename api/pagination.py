"""
Pagination for LabourHub listings.

Query params:
- page: Page number (1-indexed). A page past the end returns an empty list.
- limit: Items per page (default 10, max 50)
"""

from django.conf import settings
from django.core.paginator import EmptyPage, Page, PageNotAnInteger
from django.utils import timezone
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardPagination(PageNumberPagination):
    """Page/limit pagination returning the standard success envelope."""

    page_size = settings.LISTING_PAGE_SIZE
    page_size_query_param = 'limit'
    max_page_size = settings.LISTING_MAX_PAGE_SIZE

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        page_size = self.get_page_size(request)
        if not page_size:
            return None

        paginator = self.django_paginator_class(queryset, page_size)
        page_number = self.get_page_number(request, paginator)
        try:
            self.page = paginator.page(page_number)
        except PageNotAnInteger:
            raise ValidationError({self.page_query_param: ["Page must be a whole number."]})
        except EmptyPage:
            number = int(page_number)
            if number < 1:
                raise ValidationError({self.page_query_param: ["Page must be 1 or greater."]})
            # Past the last page: keep the real totals, return no rows
            self.page = Page([], number, paginator)

        return list(self.page)

    def get_pagination_meta(self):
        return {
            "current": self.page.number,
            "limit": self.get_page_size(self.request),
            "total": self.page.paginator.count,
            "pages": self.page.paginator.num_pages,
        }

    def get_paginated_response(self, data):
        return Response({
            "success": True,
            "data": data,
            "message": None,
            "errors": None,
            "meta": {
                "timestamp": timezone.now().isoformat(),
                "pagination": self.get_pagination_meta(),
            }
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'data': schema,
                'message': {'type': 'string', 'nullable': True},
                'errors': {'type': 'array', 'nullable': True, 'items': {}},
                'meta': {
                    'type': 'object',
                    'properties': {
                        'timestamp': {'type': 'string', 'format': 'date-time'},
                        'pagination': {
                            'type': 'object',
                            'properties': {
                                'current': {'type': 'integer'},
                                'limit': {'type': 'integer'},
                                'total': {'type': 'integer'},
                                'pages': {'type': 'integer'},
                            },
                        },
                    },
                },
            },
        }
