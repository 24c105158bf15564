"""
Command-line interface for generating and verifying checksum manifests.

Usage:
    chksum [-v] g [-f CHECKSUMS] [-a ALGORITHM] [-n NUM_THREADS] [-d DIR]... [-e EXCLUDE]...
    chksum [-v] v [-f CHECKSUMS] [-a ALGORITHM] [-n NUM_THREADS] [-q]

A CHECKSUMS value of '-' writes the manifest to stdout (g) or reads it
from stdin (v).
"""

import argparse
import logging
import sys
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from domain.algorithm import Algorithm, parse_algorithm
from domain.errors import ChecksumError, InvalidAlgorithmError
from domain.hash_constants import DEFAULT_ALGORITHM, DEFAULT_CHECKSUM_FILE
from infrastructure.cpu import physical_core_count
from infrastructure.file_manifest_repository import FileManifestRepository
from application.dtos import GenerationOptions, VerificationOptions
from application.generate_checksums import GenerateChecksums
from application.verify_checksums import VerifyChecksums

logger = logging.getLogger(__name__)


def _to_algorithm(value: Union[str, Algorithm, None]) -> Optional[Algorithm]:
    if value is None or isinstance(value, Algorithm):
        return value
    try:
        return parse_algorithm(value)
    except InvalidAlgorithmError as e:
        raise ValueError(str(e)) from e


class GenerateCommand(BaseModel):
    """Validated arguments of the generate subcommand."""
    checksum_file: str = Field(DEFAULT_CHECKSUM_FILE, description="Manifest to write, '-' for stdout")
    algorithm: Algorithm = Field(Algorithm.SHA256, description="Hash algorithm")
    num_threads: int = Field(..., gt=0, description="Number of worker threads")
    directories: List[str] = Field(default_factory=lambda: ["."], min_length=1, description="Root directories")
    excludes: List[str] = Field(default_factory=list, description="Paths to leave out of the manifest")

    @field_validator("algorithm", mode="before")
    @classmethod
    def parse_algorithm_name(cls, value):
        return _to_algorithm(value)

    def to_options(self) -> GenerationOptions:
        return GenerationOptions(
            num_threads=self.num_threads,
            algorithm=self.algorithm,
            directories=list(self.directories),
            excludes=list(self.excludes)
        )


class VerifyCommand(BaseModel):
    """Validated arguments of the verify subcommand."""
    checksum_file: str = Field(DEFAULT_CHECKSUM_FILE, description="Manifest to read, '-' for stdin")
    algorithm: Optional[Algorithm] = Field(None, description="Hash algorithm, inferred per line if unset")
    num_threads: int = Field(..., gt=0, description="Number of worker threads")
    quiet: bool = Field(False, description="Do not print OK lines")

    @field_validator("algorithm", mode="before")
    @classmethod
    def parse_algorithm_name(cls, value):
        return _to_algorithm(value)

    def to_options(self) -> VerificationOptions:
        return VerificationOptions(
            num_threads=self.num_threads,
            algorithm=self.algorithm,
            quiet=self.quiet
        )


def build_parser() -> argparse.ArgumentParser:
    default_threads = physical_core_count()

    parser = argparse.ArgumentParser(
        prog="chksum",
        description="A tool to generate and verify file checksums.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print debug diagnostics")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("g", aliases=["generate"],
                                     help="Generate a checksum manifest")
    generate.add_argument("-f", "--checksum-file", default=DEFAULT_CHECKSUM_FILE,
                          help=f"Manifest to write, '-' for stdout (default: {DEFAULT_CHECKSUM_FILE})")
    generate.add_argument("-a", "--algorithm", default=DEFAULT_ALGORITHM,
                          help=f"MD5, SHA1, SHA224, SHA256, SHA384 or SHA512 (default: {DEFAULT_ALGORITHM})")
    generate.add_argument("-n", "--num-threads", type=int, default=default_threads,
                          help=f"Number of worker threads (default: {default_threads})")
    generate.add_argument("-d", "--directory", dest="directories", action="append",
                          help="Directory to scan, may be repeated (default: .)")
    generate.add_argument("-e", "--exclude", dest="excludes", action="append",
                          help="Path to leave out of the manifest, may be repeated")
    generate.set_defaults(command="g")

    verify = subparsers.add_parser("v", aliases=["verify"],
                                   help="Verify files against a checksum manifest")
    verify.add_argument("-f", "--checksum-file", default=DEFAULT_CHECKSUM_FILE,
                        help=f"Manifest to read, '-' for stdin (default: {DEFAULT_CHECKSUM_FILE})")
    verify.add_argument("-a", "--algorithm", default=None,
                        help="Hash algorithm (default: inferred from each digest's length)")
    verify.add_argument("-n", "--num-threads", type=int, default=default_threads,
                        help=f"Number of worker threads (default: {default_threads})")
    verify.add_argument("-q", "--quiet", action="store_true",
                        help="Do not print a line for each file that verifies OK")
    verify.set_defaults(command="v")

    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr
    )


def _format_validation_error(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        field = ".".join(str(part) for part in detail.get("loc", ()))
        msg = detail.get("msg", "invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages)


def run(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, run the selected pipeline and return the exit status.

    Returns:
        0 if every file was processed successfully, 1 otherwise
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "g":
            command = GenerateCommand(
                checksum_file=args.checksum_file,
                algorithm=args.algorithm,
                num_threads=args.num_threads,
                directories=args.directories or ["."],
                excludes=args.excludes or []
            )
            options = command.to_options()
            handler = GenerateChecksums(options, FileManifestRepository(command.checksum_file))
        else:
            command = VerifyCommand(
                checksum_file=args.checksum_file,
                algorithm=args.algorithm,
                num_threads=args.num_threads,
                quiet=args.quiet
            )
            options = command.to_options()
            handler = VerifyChecksums(options, FileManifestRepository(command.checksum_file))
    except ValidationError as e:
        print(f"Error: {_format_validation_error(e)}", file=sys.stderr)
        return 1

    logger.debug("Running %s with %s", type(handler).__name__, options)
    try:
        succeeded = handler.handle()
    except (OSError, UnicodeError, ChecksumError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0 if succeeded else 1
