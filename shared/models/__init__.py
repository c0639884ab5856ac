from shared.models.pagination import ApiResponse, PageMeta, PaginatedResponse
from shared.models.user import CurrentUser

__all__ = ["ApiResponse", "CurrentUser", "PageMeta", "PaginatedResponse"]
