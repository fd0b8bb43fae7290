import asyncio
from unittest.mock import AsyncMock

import pytest

from cinescope.models.filters import DiscoverRequest, SearchRequest
from cinescope.models.movie import Genre
from cinescope.services.catalog import CatalogController
from cinescope.services.tmdb import GatewayError
from conftest import make_movie, make_page


def _ids(controller: CatalogController) -> list:
    return [m.id for m in controller.movies]


@pytest.fixture
def gateway():
    return AsyncMock()


@pytest.fixture
def controller(gateway):
    return CatalogController(gateway)


async def test_initial_refetch_uses_default_discover(controller, gateway):
    gateway.fetch_page.return_value = make_page([1, 2], total_pages=5)
    await controller.refetch()

    gateway.fetch_page.assert_awaited_once_with(
        DiscoverRequest(sort_by="popularity.desc", page=1)
    )
    assert _ids(controller) == [1, 2]
    assert controller.total_pages == 5
    assert controller.loading is False
    assert controller.error is None


async def test_update_filters_replaces_and_resets_page(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2], total_pages=3),
        make_page([3, 4], page=2, total_pages=3),
        make_page([7], total_pages=2),
    ]
    await controller.refetch()
    await controller.load_more()
    assert controller.current_page == 2

    await controller.update_filters(genre="28", year="2008", sort_by="vote_average.desc")

    gateway.fetch_page.assert_awaited_with(
        DiscoverRequest(sort_by="vote_average.desc", genre="28", year="2008", page=1)
    )
    assert _ids(controller) == [7]
    assert controller.current_page == 1
    assert controller.total_pages == 2


async def test_search_query_ignores_genre_and_year(controller, gateway):
    gateway.fetch_page.return_value = make_page([155])
    await controller.update_filters(search_query="batman", genre="28", year="2008")

    gateway.fetch_page.assert_awaited_once_with(SearchRequest(query="batman", page=1))


async def test_update_filters_merges_partial(controller, gateway):
    gateway.fetch_page.return_value = make_page([1])
    await controller.update_filters(genre="28")
    await controller.update_filters(year="1999")

    assert controller.filters.genre == "28"
    assert controller.filters.year == "1999"
    gateway.fetch_page.assert_awaited_with(
        DiscoverRequest(sort_by="popularity.desc", genre="28", year="1999", page=1)
    )


async def test_load_more_appends_in_arrival_order(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2, 3], total_pages=3),
        make_page([4, 5], page=2, total_pages=3),
        make_page([6], page=3, total_pages=3),
    ]
    await controller.refetch()
    await controller.load_more()
    await controller.load_more()

    assert _ids(controller) == [1, 2, 3, 4, 5, 6]
    assert controller.current_page == 3
    assert controller.has_more is False
    gateway.fetch_page.assert_awaited_with(DiscoverRequest(sort_by="popularity.desc", page=3))


async def test_load_more_keeps_duplicates_across_pages(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2], total_pages=2),
        make_page([2, 3], page=2, total_pages=2),
    ]
    await controller.refetch()
    await controller.load_more()
    assert len(controller.movies) == 4


async def test_load_more_noop_on_last_page(controller, gateway):
    gateway.fetch_page.return_value = make_page([1], total_pages=1)
    await controller.refetch()
    gateway.fetch_page.reset_mock()

    await controller.load_more()

    gateway.fetch_page.assert_not_awaited()
    assert _ids(controller) == [1]
    assert controller.current_page == 1


async def test_load_more_noop_while_loading(controller, gateway):
    controller.total_pages = 4
    controller.loading = True
    await controller.load_more()
    gateway.fetch_page.assert_not_awaited()


async def test_empty_result_keeps_pagination_invariant(controller, gateway):
    gateway.fetch_page.return_value = make_page([], total_pages=0)
    await controller.update_filters(search_query="zzzzzz")
    assert controller.movies == []
    assert controller.current_page == 1
    assert controller.total_pages == 1


async def test_failed_refetch_preserves_movies(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2], total_pages=2),
        GatewayError("discover movies", "Failed to discover movies"),
    ]
    await controller.refetch()
    await controller.refetch()

    assert _ids(controller) == [1, 2]
    assert controller.error == "Failed to discover movies"
    assert controller.loading is False


async def test_failed_filter_update_keeps_previous_results(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2], total_pages=2),
        GatewayError("search movies", "Failed to search movies"),
    ]
    await controller.refetch()
    await controller.update_filters(search_query="batman")

    assert _ids(controller) == [1, 2]
    assert controller.filters.search_query == "batman"
    assert controller.error == "Failed to search movies"


async def test_load_more_after_failed_filter_change_is_noop(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2, 3], total_pages=3),
        make_page([4, 5], page=2, total_pages=3),
        make_page([6], page=3, total_pages=3),
        GatewayError("search movies", "Failed to search movies"),
    ]
    await controller.refetch()
    await controller.load_more()
    await controller.load_more()
    await controller.update_filters(search_query="batman")
    gateway.fetch_page.reset_mock()

    await controller.load_more()

    gateway.fetch_page.assert_not_awaited()
    assert _ids(controller) == [1, 2, 3, 4, 5, 6]
    assert controller.current_page == 1
    assert controller.has_more is False


async def test_paging_resumes_after_first_page_recovers(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1, 2], total_pages=3),
        GatewayError("search movies", "Failed to search movies"),
        make_page([10], total_pages=2),
        make_page([11], page=2, total_pages=2),
    ]
    await controller.refetch()
    await controller.update_filters(search_query="batman")
    await controller.refetch()
    await controller.load_more()

    gateway.fetch_page.assert_awaited_with(SearchRequest(query="batman", page=2))
    assert _ids(controller) == [10, 11]


async def test_success_clears_previous_error(controller, gateway):
    gateway.fetch_page.side_effect = [
        GatewayError("discover movies", "Failed to discover movies"),
        make_page([1]),
    ]
    await controller.refetch()
    assert controller.error is not None
    await controller.refetch()
    assert controller.error is None
    assert _ids(controller) == [1]


async def test_failed_load_more_keeps_list_and_page(controller, gateway):
    gateway.fetch_page.side_effect = [
        make_page([1], total_pages=3),
        GatewayError("discover movies", "Failed to discover movies"),
    ]
    await controller.refetch()
    await controller.load_more()

    assert _ids(controller) == [1]
    assert controller.current_page == 1
    assert controller.error == "Failed to discover movies"


async def test_stale_first_page_is_discarded(controller, gateway):
    started = asyncio.Event()
    release_old = asyncio.Event()

    async def fetch(request):
        if request.query == "old":
            started.set()
            await release_old.wait()
            return make_page([1, 2])
        return make_page([3])

    gateway.fetch_page.side_effect = fetch

    old = asyncio.create_task(controller.update_filters(search_query="old"))
    await started.wait()
    await controller.update_filters(search_query="new")
    release_old.set()
    await old

    assert _ids(controller) == [3]
    assert controller.filters.search_query == "new"
    assert controller.loading is False


async def test_append_in_flight_is_dropped_after_filter_change(controller, gateway):
    started = asyncio.Event()
    release_append = asyncio.Event()

    async def fetch(request):
        if request.page == 2:
            started.set()
            await release_append.wait()
            return make_page([98, 99], page=2, total_pages=3)
        if request.genre == "28":
            return make_page([50], total_pages=1)
        return make_page([1, 2], total_pages=3)

    gateway.fetch_page.side_effect = fetch

    await controller.refetch()
    append = asyncio.create_task(controller.load_more())
    await started.wait()
    await controller.update_filters(genre="28")
    release_append.set()
    await append

    assert _ids(controller) == [50]
    assert controller.current_page == 1
    assert controller.total_pages == 1


async def test_load_genres_is_cached(controller, gateway):
    gateway.get_genres.return_value = [Genre(id=28, name="Action")]

    first = await controller.load_genres()
    second = await controller.load_genres()

    assert first.ok and second.ok
    assert second.value == [Genre(id=28, name="Action")]
    gateway.get_genres.assert_awaited_once()


async def test_load_genres_failure_is_observable_not_fatal(controller, gateway):
    gateway.get_genres.side_effect = GatewayError("fetch genres", "Failed to fetch genres")

    result = await controller.load_genres()

    assert result.ok is False
    assert result.value == []
    assert result.error == "Failed to fetch genres"
    assert controller.error is None


async def test_initialize_loads_movies_and_genres(controller, gateway):
    gateway.fetch_page.return_value = make_page([1])
    gateway.get_genres.return_value = [Genre(id=28, name="Action")]

    await controller.initialize()

    assert _ids(controller) == [1]
    assert controller.genres == [Genre(id=28, name="Action")]


async def test_genre_names(controller):
    controller.genres = [Genre(id=28, name="Action"), Genre(id=18, name="Drama")]
    movie = make_movie(1, genre_ids=[18, 999, 28])
    assert controller.genre_names(movie) == ["Drama", "Action"]
