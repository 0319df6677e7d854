"""Lambda code archive helpers."""

import base64
import hashlib
from pathlib import Path


def filebase64sha256(path: str | Path) -> str:
    """Base64-encoded SHA-256 of a file, as Lambda reports ``CodeSha256``."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return base64.b64encode(digest.digest()).decode("ascii")


def resolve_archive(path: str | Path, base_dir: str | Path) -> Path:
    """Resolve the archive path against the Pulumi project directory.

    Raises:
        FileNotFoundError: If the archive has not been built yet.
    """
    archive = Path(path)
    if not archive.is_absolute():
        archive = Path(base_dir) / archive
    archive = archive.resolve()
    if not archive.is_file():
        raise FileNotFoundError(
            f"Lambda archive not found at {archive}. "
            "Build it with: python scripts/package_lambda.py"
        )
    return archive
