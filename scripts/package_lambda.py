#!/usr/bin/env python3
"""Build the Lambda archive for the todos API.

Installs the ``lambda`` dependency group from pyproject.toml for the Lambda
platform, adds the ``api`` and ``common`` packages, and writes a zip with
fixed timestamps so unchanged sources keep the same source_code_hash.

Usage:
    python scripts/package_lambda.py

    # Custom output / Python version:
    python scripts/package_lambda.py --output /tmp/lambda.zip --python-version 3.12
"""

import argparse
import shutil
import subprocess
import sys
import tempfile
import tomllib
import zipfile
from pathlib import Path

from components.archive import filebase64sha256

ROOT = Path(__file__).resolve().parent.parent
BACKEND_DIR = ROOT / "backend"
SOURCE_PACKAGES = ("api", "common")
DEFAULT_OUTPUT = BACKEND_DIR / "dist" / "lambda.zip"

# Earliest timestamp a zip entry can carry
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


def lambda_requirements() -> list[str]:
    """Read the runtime requirements of the function from pyproject.toml."""
    with open(ROOT / "pyproject.toml", "rb") as f:
        pyproject = tomllib.load(f)
    return pyproject["project"]["optional-dependencies"]["lambda"]


def install_requirements(requirements: list[str], target: Path, python_version: str) -> None:
    """Install manylinux wheels into the build directory."""
    subprocess.run(
        [
            sys.executable,
            "-m",
            "pip",
            "install",
            "--quiet",
            "--target",
            str(target),
            "--platform",
            "manylinux2014_x86_64",
            "--implementation",
            "cp",
            "--python-version",
            python_version,
            "--only-binary=:all:",
            *requirements,
        ],
        check=True,
    )


def copy_sources(target: Path) -> None:
    """Copy the application packages next to the dependencies."""
    for package in SOURCE_PACKAGES:
        shutil.copytree(
            BACKEND_DIR / package,
            target / package,
            ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
        )


def write_archive(build_dir: Path, output: Path) -> int:
    """Zip the build directory deterministically. Returns the file count."""
    output.parent.mkdir(parents=True, exist_ok=True)
    files = sorted(p for p in build_dir.rglob("*") if p.is_file() and "__pycache__" not in p.parts)
    with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in files:
            info = zipfile.ZipInfo(path.relative_to(build_dir).as_posix(), date_time=ZIP_EPOCH)
            info.external_attr = 0o644 << 16
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, path.read_bytes())
    return len(files)


def main() -> int:
    parser = argparse.ArgumentParser(description="Build the todos API Lambda archive")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Archive path (default: {DEFAULT_OUTPUT.relative_to(ROOT)})",
    )
    parser.add_argument(
        "--python-version",
        default="3.12",
        help="Lambda runtime Python version (default: 3.12)",
    )
    args = parser.parse_args()

    requirements = lambda_requirements()
    with tempfile.TemporaryDirectory(prefix="todos-lambda-") as tmp:
        build_dir = Path(tmp)
        print(f"Installing {len(requirements)} requirements for Python {args.python_version}...")
        try:
            install_requirements(requirements, build_dir, args.python_version)
        except subprocess.CalledProcessError as e:
            print(f"❌ pip install failed with exit code {e.returncode}", file=sys.stderr)
            return e.returncode

        copy_sources(build_dir)
        count = write_archive(build_dir, args.output)

    print(f"✓ {args.output} ({count} files)")
    print(f"  source_code_hash: {filebase64sha256(args.output)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
