# core/api/pagination.py

"""
ENVELOPE PAGINATION

Query params:
    ?page=<n>&limit=<size>

Response:
    {
      "success": true,
      "data": [...],
      "pagination": {"page": 1, "totalPages": 3, "totalItems": 25, "limit": 10}
    }
"""

from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class EnvelopePagination(PageNumberPagination):
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = getattr(settings, "API_MAX_PAGE_SIZE", 100)

    def get_paginated_response(self, data):
        paginator = self.page.paginator
        return Response(
            {
                "success": True,
                "data": data,
                "pagination": {
                    "page": self.page.number,
                    "totalPages": paginator.num_pages,
                    "totalItems": paginator.count,
                    "limit": self.get_page_size(self.request),
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "success": {"type": "boolean"},
                "data": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                        "totalItems": {"type": "integer"},
                        "limit": {"type": "integer"},
                    },
                },
            },
        }
