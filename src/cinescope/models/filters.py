from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from cinescope.constants.tmdb import DEFAULT_SORT


@dataclass(frozen=True)
class FilterOptions:
    search_query: str = ""
    genre: str = ""  # genre id as string, empty = any
    year: str = ""  # 4-digit year, empty = any
    sort_by: str = DEFAULT_SORT

    def merge(self, **partial) -> FilterOptions:
        """Return a copy with the given fields replaced, others unchanged."""
        return replace(self, **partial)


@dataclass(frozen=True)
class SearchRequest:
    query: str
    page: int = 1


@dataclass(frozen=True)
class DiscoverRequest:
    sort_by: str
    genre: str | None = None
    year: str | None = None
    page: int = 1

    def to_params(self) -> dict[str, str | int]:
        params: dict[str, str | int] = {"sort_by": self.sort_by, "page": self.page}
        if self.genre:
            params["with_genres"] = self.genre
        if self.year:
            params["year"] = self.year
        return params


CatalogRequest = Union[SearchRequest, DiscoverRequest]


def build_catalog_request(filters: FilterOptions, page: int = 1) -> CatalogRequest:
    # Whitespace-only queries still count as a search
    if filters.search_query:
        return SearchRequest(query=filters.search_query, page=page)

    return DiscoverRequest(
        sort_by=filters.sort_by,
        genre=filters.genre or None,
        year=filters.year or None,
        page=page,
    )
