# blog_api/api/deps.py
from typing import Optional


class ListQueryParams:
    """``?search=&orderBy=`` shared by the post and comment listings."""

    def __init__(self, search: Optional[str] = None, orderBy: Optional[str] = None):
        self.search = search.strip() if search and search.strip() else None
        self.order_by = orderBy

    @property
    def newest_first(self) -> bool:
        # orderBy=oldest (or asc) sorts ascending; anything else is newest first
        return (self.order_by or "").lower() not in ("oldest", "asc")


list_params = ListQueryParams
