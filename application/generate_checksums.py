import logging
from typing import List

from domain.digest import compute_checksum
from domain.exclusion_filter import ExclusionFilter
from domain.manifest import ManifestEntry, sort_entries, strip_dot_prefix
from domain.manifest_repository import ManifestRepository
from infrastructure.tree_walker import walk_files
from infrastructure.worker_pool import ResultChannel, WorkerPool
from application.dtos import GenerationOptions, GenerationSummary

logger = logging.getLogger(__name__)


class GenerateChecksums:
    """Orchestrates checksum generation over one or more directory trees."""

    def __init__(self, options: GenerationOptions, manifest_repository: ManifestRepository):
        self.options = options
        self.manifest_repository = manifest_repository
        self.summary = GenerationSummary()

    def handle(self) -> bool:
        """
        Digest every non-excluded file and write the sorted manifest.

        Returns:
            True if every file was digested successfully

        Raises:
            OSError: If the manifest cannot be written
            UnknownError: If fewer results arrive than were submitted
        """
        opts = self.options
        self.summary = GenerationSummary()
        exclusion_filter = ExclusionFilter(opts.excludes, self.manifest_repository.path)
        logger.debug("Excluding %d path(s)", len(exclusion_filter))

        entries: List[ManifestEntry] = []
        channel: ResultChannel = ResultChannel()
        with WorkerPool(opts.num_threads) as pool:
            count = self._submit_files(pool, channel, exclusion_filter)

            for result in pool.drain(channel, count):
                if result.ok:
                    path, digest = result.value
                    entries.append(ManifestEntry.from_digest(path, digest))
                else:
                    logger.error("%s", result.error)
                    self.summary.failed += 1

        self.summary.written = self.manifest_repository.write_entries(sort_entries(entries))
        logger.info(
            "Wrote %d %s checksum(s) to %s, %d failed",
            self.summary.written,
            opts.algorithm,
            "stdout" if self.manifest_repository.is_stdio else self.manifest_repository.path,
            self.summary.failed
        )
        return self.summary.success

    def _submit_files(
        self,
        pool: WorkerPool,
        channel: ResultChannel,
        exclusion_filter: ExclusionFilter
    ) -> int:
        """
        Submit one unit per file and return how many were submitted.

        Overlapping roots enumerate some files more than once; each manifest
        path is submitted only the first time it is seen.
        """
        count = 0
        seen = set()
        for directory in self.options.directories:
            for path in walk_files(directory):
                if exclusion_filter.is_excluded(path):
                    logger.debug("Excluded %s", path)
                    continue
                manifest_path = strip_dot_prefix(path)
                if manifest_path in seen:
                    logger.debug("Already listed %s", path)
                    continue
                seen.add(manifest_path)
                pool.submit(channel, compute_checksum, path, self.options.algorithm)
                count += 1
        self.summary.submitted = count
        return count
