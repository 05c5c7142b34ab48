"""Tests for the paginated chunk fetcher."""

import asyncio

import pytest

from kgsync.models import FilterSet, PageRequest, PageResponse, SortOrder
from kgsync.sync.fetcher import PaginatedFetcher

from tests.fakes import BrokenSource, FakeChunkSource, GatedSource


def run_fetch(
    source: FakeChunkSource,
    workspace_id: str | None = None,
    filters: FilterSet | None = None,
) -> tuple[PaginatedFetcher, object]:
    fetcher = PaginatedFetcher(source)
    result = asyncio.run(fetcher.fetch(workspace_id, filters))
    return fetcher, result


class TestPagination:
    def test_enumerates_120_in_three_pages(self) -> None:
        source = FakeChunkSource(size=120)
        fetcher, result = run_fetch(source)

        assert [r.skip for r in source.requests] == [0, 50, 100]
        assert all(r.limit == 50 for r in source.requests)
        assert len(fetcher.chunks) == 120
        assert fetcher.total == 120
        assert result.total == 120
        assert fetcher.error is None

    def test_preserves_arrival_order(self) -> None:
        source = FakeChunkSource(size=75)
        fetcher, _ = run_fetch(source)
        assert [c.id for c in fetcher.chunks] == [f"chunk-{i}" for i in range(75)]

    @pytest.mark.parametrize(
        ("total", "expected_requests"),
        [(1, 1), (49, 1), (50, 1), (51, 2), (100, 2), (101, 3), (250, 5)],
    )
    def test_request_count_is_ceil_total_over_page_size(
        self, total: int, expected_requests: int
    ) -> None:
        source = FakeChunkSource(size=total)
        fetcher, _ = run_fetch(source)
        assert len(source.requests) == expected_requests
        assert len(fetcher.chunks) == total

    def test_empty_collection_issues_single_request(self) -> None:
        source = FakeChunkSource(size=0)
        fetcher, result = run_fetch(source)

        assert len(source.requests) == 1
        assert fetcher.chunks == []
        assert fetcher.total == 0
        assert result.error is None

    def test_first_page_total_is_authoritative(self) -> None:
        # Backend count says 60 but more items keep arriving (concurrent writes).
        source = FakeChunkSource(size=500, count=60)
        fetcher, _ = run_fetch(source)

        assert len(source.requests) == 2
        assert fetcher.total == 60
        assert len(fetcher.chunks) == 100

    def test_later_page_counts_are_ignored(self) -> None:
        class GrowingSource(FakeChunkSource):
            async def get_chunks(self, request: PageRequest) -> PageResponse:
                page = await super().get_chunks(request)
                return page.model_copy(update={"count": 1000 + request.skip})

        source = GrowingSource(size=80)
        fetcher, _ = run_fetch(source)
        assert fetcher.total == 1000
        assert len(fetcher.chunks) == 80

    def test_missing_count_defers_to_accumulated_length(self) -> None:
        source = FakeChunkSource(size=130, count=None)
        fetcher, result = run_fetch(source)

        assert len(source.requests) == 3
        assert fetcher.total == 130
        assert result.total == 130

    def test_custom_page_size(self) -> None:
        source = FakeChunkSource(size=25)
        fetcher = PaginatedFetcher(source, page_size=10)
        asyncio.run(fetcher.fetch(None))
        assert [r.skip for r in source.requests] == [0, 10, 20]

    def test_rejects_non_positive_page_size(self) -> None:
        with pytest.raises(ValueError):
            PaginatedFetcher(FakeChunkSource(size=0), page_size=0)


class TestRequestBuilding:
    def test_filters_and_scope_are_sent_on_every_page(self) -> None:
        source = FakeChunkSource(size=60)
        filters = FilterSet(
            data_type="object",
            order=SortOrder.ASCENDING,
            document_id="doc-1",
            include_embeddings=True,
        )
        run_fetch(source, workspace_id="ws-1", filters=filters)

        for request in source.requests:
            params = request.to_params()
            assert params["workspace_id"] == "ws-1"
            assert params["data_type"] == "object"
            assert params["order"] == 1
            assert params["document_id"] == "doc-1"
            assert params["include_embeddings"] is True
            assert "seed_concept" not in params

    def test_unscoped_fetch_omits_workspace(self) -> None:
        source = FakeChunkSource(size=1)
        run_fetch(source)
        params = source.requests[0].to_params()
        assert "workspace_id" not in params
        assert params["order"] == -1


class TestFailure:
    def test_failure_on_later_page_discards_everything(self) -> None:
        source = FakeChunkSource(size=200, fail_at=100)
        fetcher, result = run_fetch(source)

        assert fetcher.chunks == []
        assert fetcher.total == 0
        assert fetcher.error is not None
        assert "offset 100" in fetcher.error
        assert result.items == []
        assert len(source.requests) == 3

    def test_failure_on_first_page(self) -> None:
        source = FakeChunkSource(size=10, fail_at=0)
        fetcher, _ = run_fetch(source)

        assert fetcher.chunks == []
        assert fetcher.total == 0
        assert fetcher.error == "Internal Server Error"

    def test_failure_resets_previous_results(self) -> None:
        source = FakeChunkSource(size=30)
        fetcher = PaginatedFetcher(source)
        asyncio.run(fetcher.fetch(None))
        assert len(fetcher.chunks) == 30

        source.fail_at = 0
        asyncio.run(fetcher.fetch(None))
        assert fetcher.chunks == []
        assert fetcher.total == 0
        assert fetcher.error is not None

    def test_no_automatic_retry(self) -> None:
        source = FakeChunkSource(size=10, fail_at=0)
        run_fetch(source)
        assert len(source.requests) == 1

    def test_new_fetch_clears_error(self) -> None:
        source = FakeChunkSource(size=10, fail_at=0)
        fetcher = PaginatedFetcher(source)
        asyncio.run(fetcher.fetch(None))
        assert fetcher.error is not None

        source.fail_at = None
        asyncio.run(fetcher.fetch(None))
        assert fetcher.error is None
        assert fetcher.total == 10

    def test_clear_error(self) -> None:
        fetcher, _ = run_fetch(FakeChunkSource(size=10, fail_at=0))
        fetcher.clear_error()
        assert fetcher.error is None

    def test_unexpected_error_resets_and_stops_loading(self) -> None:
        fetcher = PaginatedFetcher(FakeChunkSource(size=30))
        asyncio.run(fetcher.fetch(None))

        fetcher._source = BrokenSource(KeyError("count"))
        result = asyncio.run(fetcher.fetch(None))

        assert result.applied is True
        assert fetcher.loading is False
        assert fetcher.chunks == []
        assert fetcher.total == 0
        assert fetcher.error == "Failed to fetch chunks"


class TestGenerations:
    def test_generation_increments_per_fetch(self) -> None:
        fetcher = PaginatedFetcher(FakeChunkSource(size=1))
        asyncio.run(fetcher.fetch(None))
        asyncio.run(fetcher.fetch(None))
        assert fetcher.generation == 2

    def test_late_stale_result_is_discarded(self) -> None:
        async def scenario():
            source = GatedSource()
            fetcher = PaginatedFetcher(source)
            first = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="string"))
            )
            await asyncio.sleep(0)
            second = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="object"))
            )
            source.release("object")
            newer = await second
            source.release("string")
            older = await first
            return fetcher, older, newer

        fetcher, older, newer = asyncio.run(scenario())

        assert newer.applied is True
        assert older.applied is False
        assert older.generation == 1
        assert newer.generation == 2
        assert [c.id for c in fetcher.chunks] == ["object-0"]
        assert fetcher.loading is False

    def test_stale_failure_does_not_set_error(self) -> None:
        async def scenario():
            source = GatedSource(fail={"string"})
            fetcher = PaginatedFetcher(source)
            first = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="string"))
            )
            await asyncio.sleep(0)
            second = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="object"))
            )
            source.release("object")
            await second
            source.release("string")
            await first
            return fetcher

        fetcher = asyncio.run(scenario())
        assert fetcher.error is None
        assert [c.id for c in fetcher.chunks] == ["object-0"]

    def test_loading_stays_set_while_newest_generation_runs(self) -> None:
        async def scenario():
            source = GatedSource()
            fetcher = PaginatedFetcher(source)
            first = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="string"))
            )
            await asyncio.sleep(0)
            second = asyncio.create_task(
                fetcher.fetch(None, FilterSet(data_type="object"))
            )
            await asyncio.sleep(0)
            source.release("string")
            await first
            still_loading = fetcher.loading
            source.release("object")
            await second
            return still_loading, fetcher.loading

        still_loading, done = asyncio.run(scenario())
        assert still_loading is True
        assert done is False
