"""
Pagination utilities for the project.

Defines the default page number pagination class used by the list
endpoints (leader dashboard, backlog, archive).  The page size is
controlled centrally here rather than duplicated throughout the codebase.
"""
from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """A simple page number paginator with a client-adjustable page size."""
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100
