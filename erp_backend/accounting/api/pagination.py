# accounting/api/pagination.py

"""
Ledger screens page with ?page=&limit= and expect
{data, pagination: {page, limit, total, totalPages}}.
"""

import math

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class LedgerPagination(PageNumberPagination):
    page_size = 100
    page_query_param = "page"
    page_size_query_param = "limit"
    max_page_size = 1000

    def get_paginated_response(self, data):
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return Response(
            {
                "data": data,
                "pagination": {
                    "page": self.page.number,
                    "limit": limit,
                    "total": total,
                    "totalPages": math.ceil(total / limit) if limit else 0,
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "data": schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "page": {"type": "integer"},
                        "limit": {"type": "integer"},
                        "total": {"type": "integer"},
                        "totalPages": {"type": "integer"},
                    },
                },
            },
        }
