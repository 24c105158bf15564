import logging
import sys
from typing import Optional, TextIO

from domain.digest import verify_checksum
from domain.errors import InvalidDigestFormatError
from domain.manifest import parse_line
from domain.manifest_repository import ManifestRepository
from infrastructure.text_stream import write_text
from infrastructure.worker_pool import ResultChannel, WorkerPool
from application.dtos import VerificationOptions, VerificationSummary

logger = logging.getLogger(__name__)


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


class VerifyChecksums:
    """Orchestrates verification of the files listed in a manifest."""

    def __init__(
        self,
        options: VerificationOptions,
        manifest_repository: ManifestRepository,
        output: Optional[TextIO] = None
    ):
        self.options = options
        self.manifest_repository = manifest_repository
        self.output = output
        self.summary = VerificationSummary()

    def handle(self) -> bool:
        """
        Re-digest every listed file and report OK/FAILED per line.

        Returns:
            True if every line was well formed and every file matched

        Raises:
            OSError: If the manifest cannot be opened or read
            UnknownError: If fewer results arrive than were submitted
        """
        self.summary = VerificationSummary()
        out = self.output or sys.stdout

        channel: ResultChannel = ResultChannel()
        with WorkerPool(self.options.num_threads) as pool:
            count = self._submit_lines(pool, channel)

            for result in pool.drain(channel, count):
                if not result.ok:
                    logger.error("%s", result.error)
                    self.summary.unreadable += 1
                    continue

                path, is_ok = result.value
                if is_ok:
                    self.summary.matched += 1
                    if not self.options.quiet:
                        write_text(out, f"{path}: OK\n")
                else:
                    self.summary.mismatched += 1
                    write_text(out, f"{path}: FAILED\n")
        out.flush()

        self._log_summary()
        return self.summary.success

    def _submit_lines(self, pool: WorkerPool, channel: ResultChannel) -> int:
        """Submit one unit per well-formed manifest line and return how many were submitted."""
        count = 0
        for line in self.manifest_repository.read_lines():
            try:
                entry = parse_line(line)
            except InvalidDigestFormatError as e:
                logger.error("%s", e)
                self.summary.malformed += 1
                continue
            if entry is None:
                continue

            pool.submit(channel, verify_checksum, entry.path, entry.digest, self.options.algorithm)
            count += 1
        self.summary.submitted = count
        return count

    def _log_summary(self) -> None:
        s = self.summary
        if s.malformed:
            logger.warning(
                "%d %s improperly formatted",
                s.malformed, _plural(s.malformed, "line is", "lines are")
            )
        if s.unreadable:
            logger.warning(
                "%d listed %s could not be verified",
                s.unreadable, _plural(s.unreadable, "file", "files")
            )
        if s.mismatched:
            logger.warning(
                "%d computed %s did NOT match",
                s.mismatched, _plural(s.mismatched, "checksum", "checksums")
            )
