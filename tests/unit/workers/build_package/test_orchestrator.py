"""
Unit tests for PackageBuildOrchestrator.

Why: The orchestrator sequences every step of a package build and decides
     which failures are absorbed and which reach the caller
What: Tests the happy path, unreachable repositories, empty tag lists,
      propagated failures and step ordering
How: Mocks the loader, git client, repositories, reconciler and dispatcher
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from release_sync.git.exceptions import GitCommandError, GitTimeoutError
from release_sync.packages.exceptions import PackageNotFoundError
from release_sync.queue.models import JobSpec
from release_sync.workers.build_package.orchestrator import PackageBuildOrchestrator
from tests.fixtures.releases import (
    PackagePolicyFactory,
    ReleaseFactory,
    RemoteTagFactory,
)

PACKAGE = "com.example.package"


@pytest.fixture
def calls() -> list[str]:
    """Names of collaborator calls in the order they happen."""
    return []


@pytest.fixture
def package_loader() -> MagicMock:
    loader = MagicMock()
    loader.load.return_value = PackagePolicyFactory.create(
        name=PACKAGE, repoUrl="https://github.com/example/package"
    )
    return loader


@pytest.fixture
def git_client() -> AsyncMock:
    client = AsyncMock()
    client.list_remote_tags.return_value = RemoteTagFactory.create_many(
        "v2.0.0", "upm/v2.0.0", "v1.0.0", "junk"
    )
    return client


@pytest.fixture
def mock_session(calls: list[str]) -> AsyncMock:
    session = AsyncMock()
    session.commit.side_effect = lambda: calls.append("commit")
    return session


@pytest.fixture
def package_extra_repository(calls: list[str]) -> AsyncMock:
    repository = AsyncMock()
    repository.set_repo_unavailable.side_effect = (
        lambda name, flag: calls.append(f"repo_unavailable={flag}")
    )
    repository.set_invalid_tags.side_effect = lambda name, tags: calls.append(
        "invalid_tags"
    )
    return repository


@pytest.fixture
def reconciler(calls: list[str]) -> AsyncMock:
    reconciler = AsyncMock()

    async def reconcile(name, tags):
        calls.append("reconcile")
        return [ReleaseFactory.from_tag(x, package_name=name) for x in tags]

    reconciler.reconcile.side_effect = reconcile
    return reconciler


@pytest.fixture
def dispatcher(calls: list[str]) -> AsyncMock:
    dispatcher = AsyncMock()

    async def dispatch(releases):
        calls.append("dispatch")
        return [
            JobSpec(id=f"build-release:{x.package_name}:{x.version}", name="build-release")
            for x in releases
        ]

    dispatcher.dispatch.side_effect = dispatch
    return dispatcher


@pytest.fixture
def orchestrator(
    mock_session: AsyncMock,
    package_loader: MagicMock,
    git_client: AsyncMock,
    package_extra_repository: AsyncMock,
    reconciler: AsyncMock,
    dispatcher: AsyncMock,
) -> PackageBuildOrchestrator:
    return PackageBuildOrchestrator(
        session=mock_session,
        package_loader=package_loader,
        git_client=git_client,
        package_extra_repository=package_extra_repository,
        reconciler=reconciler,
        dispatcher=dispatcher,
    )


class TestBuildPackage:
    """Test the build-package pipeline."""

    async def test_happy_path(
        self,
        orchestrator: PackageBuildOrchestrator,
        git_client: AsyncMock,
        package_extra_repository: AsyncMock,
        calls: list[str],
    ) -> None:
        """
        Why: A reachable repository with tags must produce releases and jobs
        What: Tests every step and the returned result
        How: Runs build_package and inspects mocks and result
        """
        result = await orchestrator.build_package(PACKAGE)

        git_client.list_remote_tags.assert_awaited_once_with(
            "git@github.com:example/package.git"
        )
        assert not result.repo_unavailable
        assert [x.tag for x in result.valid_tags] == ["v1.0.0", "upm/v2.0.0"]
        assert [x.tag for x in result.invalid_tags] == ["v2.0.0", "junk"]
        assert [x.version for x in result.releases] == ["1.0.0", "2.0.0"]
        assert result.jobs_enqueued == 2

        package_extra_repository.set_invalid_tags.assert_awaited_once()
        _, invalid_tags = package_extra_repository.set_invalid_tags.await_args.args
        assert [x["tag"] for x in invalid_tags] == ["v2.0.0", "junk"]
        assert set(invalid_tags[0]) == {"tag", "commit"}

        assert calls == [
            "repo_unavailable=False",
            "invalid_tags",
            "commit",
            "reconcile",
            "commit",
            "dispatch",
        ]

    @pytest.mark.parametrize(
        "stderr",
        [
            "ERROR: Repository not found.",
            "fatal: Could not read from remote repository.",
            "remote: Repository not found.",
            "fatal: could not read Username for 'https://github.com': terminal prompts disabled",
        ],
    )
    async def test_unreachable_repository(
        self,
        orchestrator: PackageBuildOrchestrator,
        git_client: AsyncMock,
        package_extra_repository: AsyncMock,
        reconciler: AsyncMock,
        dispatcher: AsyncMock,
        mock_session: AsyncMock,
        stderr: str,
    ) -> None:
        """
        Why: Deleted or private repositories are an expected condition
        What: Tests each known unreachable-repository message
        How: Raises GitCommandError from the git client
        """
        git_client.list_remote_tags.side_effect = GitCommandError(
            "git ls-remote failed with exit code 128", returncode=128, stderr=stderr
        )

        result = await orchestrator.build_package(PACKAGE)

        assert result.repo_unavailable
        assert result.releases == []
        assert result.jobs == []
        package_extra_repository.set_repo_unavailable.assert_awaited_once_with(
            PACKAGE, True
        )
        package_extra_repository.set_invalid_tags.assert_not_awaited()
        reconciler.reconcile.assert_not_awaited()
        dispatcher.dispatch.assert_not_awaited()
        mock_session.commit.assert_awaited_once()

    async def test_other_git_errors_propagate(
        self,
        orchestrator: PackageBuildOrchestrator,
        git_client: AsyncMock,
        package_extra_repository: AsyncMock,
    ) -> None:
        """
        Why: Unknown git failures must surface to the caller
        What: Tests a GitCommandError without a known signature
        How: Expects the error to be raised and no flag written
        """
        git_client.list_remote_tags.side_effect = GitCommandError(
            "git ls-remote failed", returncode=128, stderr="fatal: unable to access"
        )

        with pytest.raises(GitCommandError):
            await orchestrator.build_package(PACKAGE)

        package_extra_repository.set_repo_unavailable.assert_not_awaited()

    async def test_git_timeout_propagates(
        self, orchestrator: PackageBuildOrchestrator, git_client: AsyncMock
    ) -> None:
        """
        Why: A hanging remote is a failure, not an unavailable repository
        What: Tests GitTimeoutError from the git client
        How: Expects the error to be raised
        """
        git_client.list_remote_tags.side_effect = GitTimeoutError("timed out")

        with pytest.raises(GitTimeoutError):
            await orchestrator.build_package(PACKAGE)

    async def test_missing_manifest_propagates(
        self,
        orchestrator: PackageBuildOrchestrator,
        package_loader: MagicMock,
        git_client: AsyncMock,
    ) -> None:
        """
        Why: Unknown packages must fail loudly
        What: Tests PackageNotFoundError from the loader
        How: Expects the error and no git call
        """
        package_loader.load.side_effect = PackageNotFoundError("not found", PACKAGE)

        with pytest.raises(PackageNotFoundError):
            await orchestrator.build_package(PACKAGE)

        git_client.list_remote_tags.assert_not_awaited()

    async def test_no_valid_tags(
        self,
        orchestrator: PackageBuildOrchestrator,
        git_client: AsyncMock,
        package_extra_repository: AsyncMock,
        reconciler: AsyncMock,
        dispatcher: AsyncMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """
        Why: Packages without release tags stop after recording invalid tags
        What: Tests a tag list without any version
        How: Expects invalid tags recorded and nothing reconciled
        """
        git_client.list_remote_tags.return_value = RemoteTagFactory.create_many(
            "nightly", "latest"
        )

        with caplog.at_level("INFO"):
            result = await orchestrator.build_package(PACKAGE)

        assert result.valid_tags == []
        assert [x.tag for x in result.invalid_tags] == ["nightly", "latest"]
        package_extra_repository.set_invalid_tags.assert_awaited_once()
        reconciler.reconcile.assert_not_awaited()
        dispatcher.dispatch.assert_not_awaited()
        assert "no valid tags found" in caplog.text

    async def test_queue_failure_after_reconciliation_commit(
        self,
        orchestrator: PackageBuildOrchestrator,
        dispatcher: AsyncMock,
        calls: list[str],
    ) -> None:
        """
        Why: Reconciled releases must survive a queue outage
        What: Tests a dispatcher that raises
        How: Expects the error after the reconciliation commit
        """

        async def fail(releases):
            calls.append("dispatch")
            raise ConnectionError("redis down")

        dispatcher.dispatch.side_effect = fail

        with pytest.raises(ConnectionError):
            await orchestrator.build_package(PACKAGE)

        assert calls[-3:] == ["reconcile", "commit", "dispatch"]
