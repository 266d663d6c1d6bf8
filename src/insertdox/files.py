"""Annotate files in place through a temporary sibling and a backup."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional

from insertdox.annotate import annotate_stream
from insertdox.config import AnnotateOptions, FilesConfig
from insertdox.errors import AllocationError, BackupError, ReadError, RenameError, WriteError

logger = logging.getLogger(__name__)


def sibling(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


def annotate_file(
    path: Path,
    options: AnnotateOptions,
    files: Optional[FilesConfig] = None,
) -> Path:
    """Annotate ``path`` in place and return the path of its backup.

    The result is written to a temporary sibling first. Only once that
    succeeded is the original renamed to the backup and the temporary file
    moved into its place. When a rename fails the temporary file is kept.
    """
    files = files or FilesConfig()
    tmp_path = sibling(path, files.temp_suffix)
    backup_path = sibling(path, files.backup_suffix)

    try:
        source = path.open("r", encoding=options.encoding, errors="surrogateescape", newline="")
    except OSError as exc:
        raise ReadError(f"unable to open '{path}' for reading") from exc

    with source:
        try:
            target = tmp_path.open("w", encoding=options.encoding, errors="surrogateescape", newline="")
        except OSError as exc:
            raise WriteError(f"unable to open '{tmp_path}' for writing") from exc
        try:
            with target:
                annotate_stream(target, source, options)
        except MemoryError as exc:
            _discard(tmp_path)
            raise AllocationError(f"out of memory while processing '{path}'") from exc
        except OSError as exc:
            _discard(tmp_path)
            raise WriteError(f"unable to write '{tmp_path}': {exc}") from exc
        except BaseException:
            _discard(tmp_path)
            raise

    try:
        os.replace(path, backup_path)
    except OSError as exc:
        raise BackupError(f"unable to rename '{path}' to '{backup_path}'") from exc
    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        logger.warning("Keeping %s, the original is at %s", tmp_path, backup_path)
        raise RenameError(f"unable to rename '{tmp_path}' to '{path}'") from exc
    logger.debug("Annotated %s (backup %s)", path, backup_path)
    return backup_path


def annotate_binary(output: BinaryIO, source: BinaryIO, options: AnnotateOptions) -> None:
    """Annotate between binary streams such as stdin and stdout."""
    reader = io.TextIOWrapper(source, encoding=options.encoding, errors="surrogateescape", newline="")
    writer = io.TextIOWrapper(output, encoding=options.encoding, errors="surrogateescape", newline="")
    try:
        annotate_stream(writer, reader, options)
        writer.flush()
    finally:
        writer.detach()
        reader.detach()


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        logger.debug("Temporary file %s already gone", path)
