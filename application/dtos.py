from dataclasses import dataclass, field
from typing import List, Optional

from domain.algorithm import Algorithm


@dataclass
class GenerationOptions:
    num_threads: int
    algorithm: Algorithm = Algorithm.SHA256
    directories: List[str] = field(default_factory=lambda: ["."])
    excludes: List[str] = field(default_factory=list)


@dataclass
class VerificationOptions:
    num_threads: int
    algorithm: Optional[Algorithm] = None
    quiet: bool = False


@dataclass
class GenerationSummary:
    submitted: int = 0
    written: int = 0
    failed: int = 0

    @property
    def success(self) -> bool:
        return self.failed == 0


@dataclass
class VerificationSummary:
    submitted: int = 0
    matched: int = 0
    mismatched: int = 0
    unreadable: int = 0
    malformed: int = 0

    @property
    def success(self) -> bool:
        return self.mismatched == 0 and self.unreadable == 0 and self.malformed == 0
