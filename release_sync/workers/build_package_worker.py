"""Build-package worker.

Wires configuration, database, git and queue into the build-package
pipeline and exposes it on the command line:

    build-package <name> [--config PATH] [--log-level LEVEL]
"""

import argparse
import asyncio
import logging
import sys

from release_sync.config.exceptions import ConfigurationError
from release_sync.config.loader import load_config
from release_sync.config.models import Config
from release_sync.database.connection import DatabaseConnectionManager
from release_sync.git.client import GitClient
from release_sync.packages.manifest import PackageLoader
from release_sync.queue.base import JobQueue
from release_sync.queue.redis_queue import RedisJobQueue
from release_sync.repositories.package_extra import PackageExtraRepository
from release_sync.repositories.release import ReleaseRepository

from .build_package.interfaces import BuildPackageResult
from .build_package.job_dispatcher import JobDispatcher
from .build_package.orchestrator import PackageBuildOrchestrator
from .build_package.release_reconciler import ReleaseReconciler

logger = logging.getLogger(__name__)


class BuildPackageWorker:
    """Owns the resources the build-package pipeline needs.

    Manages:
    - Database connections
    - The build-release job queue
    - The git client and package manifest loader
    """

    def __init__(
        self,
        config: Config,
        connection_manager: DatabaseConnectionManager | None = None,
        queue: JobQueue | None = None,
        git_client: GitClient | None = None,
    ):
        """Initialize worker.

        Args:
            config: Loaded pipeline configuration
            connection_manager: Database connection manager (built from env if None)
            queue: Build-release job queue (Redis queue from config if None)
            git_client: Git client (built from config if None)
        """
        job_config = config.jobs.build_release

        self.config = config
        self.connection_manager = connection_manager or DatabaseConnectionManager()
        self.queue = queue or RedisJobQueue(
            queue_name=job_config.queue,
            url=config.queue.url,
            key_prefix=config.queue.key_prefix,
        )
        self.git_client = git_client or GitClient(
            executable=config.git.executable, timeout=config.git.timeout
        )
        self.package_loader = PackageLoader(config.packages.data_dir)

    async def build_package(self, name: str) -> BuildPackageResult:
        """Run the pipeline for one package in its own database session."""
        async with self.connection_manager.get_transaction() as session:
            orchestrator = PackageBuildOrchestrator(
                session=session,
                package_loader=self.package_loader,
                git_client=self.git_client,
                package_extra_repository=PackageExtraRepository(session),
                reconciler=ReleaseReconciler(ReleaseRepository(session)),
                dispatcher=JobDispatcher(self.queue, self.config.jobs.build_release),
            )
            result = await orchestrator.build_package(name)
            await session.commit()

        logger.info(
            "Package build finished",
            extra={
                "pkg": name,
                "repo_unavailable": result.repo_unavailable,
                "valid_tags": len(result.valid_tags),
                "invalid_tags": len(result.invalid_tags),
                "jobs": result.jobs_enqueued,
            },
        )
        return result

    async def cleanup(self) -> None:
        """Close queue and database connections."""
        await self.queue.close()
        await self.connection_manager.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="build-package",
        description="Sync package releases from git tags and queue release builds",
    )
    parser.add_argument("name", help="Package name")
    parser.add_argument("--config", help="Configuration file path")
    parser.add_argument("--log-level", help="Log level (overrides configuration)")
    return parser


async def run(argv: list[str] | None = None) -> int:
    """Parse arguments, build the package and return the exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log_level = (args.log_level or config.system.log_level.value).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    worker = BuildPackageWorker(config)
    try:
        await worker.build_package(args.name)
    except Exception as e:
        logger.error("Build package failed", extra={"pkg": args.name}, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await worker.cleanup()

    return 0


def main() -> None:
    """Main entry point for the build-package command."""
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
