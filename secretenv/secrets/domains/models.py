"""Domain models for env file generation."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class EnvFileRequest:
    """Request for turning one secret into one env file."""
    secret_id: str
    output_dir: str
    file_name: Optional[str] = None  # overrides the stem derived from secret_id


@dataclass(frozen=True)
class EnvFileResult:
    """Outcome of a successful write."""
    path: Path
    secret_id: str
