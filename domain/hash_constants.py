"""Hash constants for the checksum tool."""

DEFAULT_ALGORITHM = "SHA256"
BLOCK_SIZE = 64 * 1024  # 64KB block size for file processing
STDIO_SENTINEL = "-"  # Manifest path meaning stdin (verify) or stdout (generate)
DEFAULT_CHECKSUM_FILE = "checksums.txt"
