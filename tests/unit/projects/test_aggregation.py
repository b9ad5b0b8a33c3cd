"""Tests for the project aggregation pipeline."""

from __future__ import annotations

import asyncio

import pytest

from openpronounce.core.api.http import ClientError, NetworkError, ServerError
from openpronounce.core.config.models import AggregationConfig, AppConfig, ResolutionPolicy
from openpronounce.core.config.repo import ConfigurationError
from openpronounce.core.projects.aggregation import AggregationPipeline, PipelineError
from openpronounce.core.projects.models import Project, Snapshot
from openpronounce.core.projects.store import SnapshotStore
from tests.fakes import HTML_BASE, FakeFetcher, dir_entry, file_entry, raw_url


def _abort_config() -> AppConfig:
    return AppConfig(aggregation=AggregationConfig(on_directory_failure=ResolutionPolicy.ABORT))


# ============================================================================
# Successful runs
# ============================================================================


class TestDiscoverAndResolve:
    """Tests for a successful aggregation."""

    @pytest.mark.asyncio
    async def test_snapshot_is_sorted_and_published(self, fruit_fetcher: FakeFetcher) -> None:
        store = SnapshotStore()
        pipeline = AggregationPipeline(fruit_fetcher, store=store)

        snapshot = await pipeline.discover_and_resolve()

        assert snapshot.names() == ["Apple", "apricot", "Banana"]
        assert snapshot.warnings == ()
        assert store.current() is snapshot

    @pytest.mark.asyncio
    async def test_project_fields(self, fruit_fetcher: FakeFetcher) -> None:
        snapshot = await AggregationPipeline(fruit_fetcher).discover_and_resolve()

        apple = snapshot.find("Apple")
        assert apple == Project(
            name="Apple",
            description="A crisp apple from the orchard.",
            audio_asset_url=raw_url("Apple", "Apple.mp3"),
            icon_asset_url=raw_url("Apple", "icon.png"),
            source_url=f"{HTML_BASE}/projects/Apple",
        )

        apricot = snapshot.find("apricot")
        assert apricot is not None
        assert apricot.audio_asset_url == raw_url("apricot", "recording.MP3")
        assert apricot.icon_asset_url is None

    @pytest.mark.asyncio
    async def test_files_in_root_are_not_projects(self, fruit_fetcher: FakeFetcher) -> None:
        snapshot = await AggregationPipeline(fruit_fetcher).discover_and_resolve()
        assert snapshot.find("README.md") is None
        assert "projects/README.md" not in fruit_fetcher.listed

    @pytest.mark.asyncio
    async def test_empty_root(self) -> None:
        fetcher = FakeFetcher(listings={"projects": []})
        snapshot = await AggregationPipeline(fetcher).discover_and_resolve()
        assert len(snapshot) == 0

    @pytest.mark.asyncio
    async def test_directory_with_only_icon_and_audio(self) -> None:
        fetcher = FakeFetcher(
            listings={
                "projects": [dir_entry("Kiwi")],
                "projects/Kiwi": [file_entry("icon.png", "Kiwi"), file_entry("a.mp3", "Kiwi")],
            }
        )
        snapshot = await AggregationPipeline(fetcher).discover_and_resolve()

        kiwi = snapshot.find("Kiwi")
        assert kiwi is not None
        assert kiwi.description == ""
        assert kiwi.audio_asset_url == raw_url("Kiwi", "a.mp3")
        assert kiwi.has_icon
        assert fetcher.read == []

    @pytest.mark.asyncio
    async def test_unreadable_description_becomes_empty(self) -> None:
        desc_url = raw_url("Kiwi", "description.txt")
        fetcher = FakeFetcher(
            listings={
                "projects": [dir_entry("Kiwi")],
                "projects/Kiwi": [file_entry("description.txt", "Kiwi")],
            },
            texts={desc_url: ServerError(message="boom", method="GET", url=desc_url)},
        )
        snapshot = await AggregationPipeline(fetcher).discover_and_resolve()

        kiwi = snapshot.find("Kiwi")
        assert kiwi is not None
        assert kiwi.description == ""
        assert snapshot.warnings == ()

    @pytest.mark.asyncio
    async def test_custom_projects_path(self) -> None:
        config = AppConfig.model_validate({"content": {"projects_path": "names"}})
        fetcher = FakeFetcher(
            listings={
                "names": [dir_entry("Kiwi", root="names")],
                "names/Kiwi": [],
            }
        )
        snapshot = await AggregationPipeline(fetcher, config).discover_and_resolve()
        assert snapshot.names() == ["Kiwi"]
        assert fetcher.listed == ["names", "names/Kiwi"]

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self, fruit_fetcher: FakeFetcher) -> None:
        config = AppConfig(aggregation=AggregationConfig(max_concurrency=1))
        snapshot = await AggregationPipeline(fruit_fetcher, config).discover_and_resolve()
        assert snapshot.names() == ["Apple", "apricot", "Banana"]


# ============================================================================
# Failures
# ============================================================================


class TestDiscoveryFailure:
    """Discovery must succeed for anything to be published."""

    @pytest.mark.asyncio
    async def test_root_not_found(self) -> None:
        store = SnapshotStore()
        pipeline = AggregationPipeline(FakeFetcher(), store=store)

        with pytest.raises(PipelineError, match="Could not load projects") as exc_info:
            await pipeline.discover_and_resolve()

        assert exc_info.value.failed_stage == "discover"
        assert isinstance(exc_info.value.__cause__, ClientError)
        assert exc_info.value.__cause__.status_code == 404
        assert store.current() is None

    @pytest.mark.asyncio
    async def test_network_failure_keeps_previous_snapshot(self) -> None:
        store = SnapshotStore()
        previous = Snapshot.build([Project(name="Old")])
        store.publish(previous)

        fetcher = FakeFetcher(
            listings={"projects": NetworkError(message="down", method="GET", url="x")}
        )
        with pytest.raises(PipelineError) as exc_info:
            await AggregationPipeline(fetcher, store=store).discover_and_resolve()

        assert isinstance(exc_info.value.__cause__, NetworkError)
        assert store.current() is previous

    @pytest.mark.asyncio
    async def test_configuration_error(self) -> None:
        fetcher = FakeFetcher(listings={"projects": ConfigurationError("no repo")})
        with pytest.raises(PipelineError, match="no repo") as exc_info:
            await AggregationPipeline(fetcher).discover_and_resolve()
        assert isinstance(exc_info.value.__cause__, ConfigurationError)


class TestDirectoryFailure:
    """A project directory whose listing fails."""

    @pytest.mark.asyncio
    async def test_skip_policy_records_warning(self, fruit_fetcher: FakeFetcher) -> None:
        fruit_fetcher.listings["projects/Banana"] = ServerError(
            message="HTTP error response", method="GET", url="x", status_code=502
        )
        store = SnapshotStore()

        snapshot = await AggregationPipeline(fruit_fetcher, store=store).discover_and_resolve()

        assert snapshot.names() == ["Apple", "apricot"]
        assert len(snapshot.warnings) == 1
        assert snapshot.warnings[0].startswith("Banana: ")
        assert store.current() is snapshot

    @pytest.mark.asyncio
    async def test_abort_policy_fails_the_run(self, fruit_fetcher: FakeFetcher) -> None:
        del fruit_fetcher.listings["projects/Banana"]
        store = SnapshotStore()
        pipeline = AggregationPipeline(fruit_fetcher, _abort_config(), store=store)

        with pytest.raises(PipelineError) as exc_info:
            await pipeline.discover_and_resolve()

        assert exc_info.value.failed_stage == "resolve"
        assert isinstance(exc_info.value.__cause__, ClientError)
        assert store.current() is None

    @pytest.mark.asyncio
    async def test_abort_waits_for_all_resolutions(self, fruit_fetcher: FakeFetcher) -> None:
        """Every directory is listed before the run fails."""
        del fruit_fetcher.listings["projects/Apple"]
        pipeline = AggregationPipeline(fruit_fetcher, _abort_config())

        with pytest.raises(PipelineError):
            await pipeline.discover_and_resolve()

        assert sorted(fruit_fetcher.listed[1:]) == [
            "projects/Apple",
            "projects/Banana",
            "projects/apricot",
        ]


class TestCancellation:
    """Tests for the cancel token."""

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, fruit_fetcher: FakeFetcher) -> None:
        token = asyncio.Event()
        token.set()
        store = SnapshotStore()

        with pytest.raises(PipelineError, match="cancelled"):
            await AggregationPipeline(fruit_fetcher, store=store).discover_and_resolve(token)

        assert fruit_fetcher.listed == []
        assert store.current() is None
