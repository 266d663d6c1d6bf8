from __future__ import annotations

import io
from pathlib import Path

import pytest

from insertdox.config import AnnotateOptions, FilesConfig
from insertdox.errors import BoilerplateError, ReadError, WriteError
from insertdox.files import annotate_binary, annotate_file, sibling


def test_sibling_appends_suffix() -> None:
    assert sibling(Path("src/a.c"), ".bak") == Path("src/a.c.bak")


def test_annotate_file_returns_backup(tmp_path: Path) -> None:
    source = tmp_path / "a.c"
    source.write_bytes(b"int x;\r\n")

    backup = annotate_file(source, AnnotateOptions(filename="a.c"), FilesConfig(backup_suffix="~"))

    assert backup == tmp_path / "a.c~"
    assert backup.read_bytes() == b"int x;\r\n"
    assert source.read_bytes().endswith(b"*/\n\nint x;\r\n")


def test_undecodable_bytes_survive(tmp_path: Path) -> None:
    source = tmp_path / "a.c"
    source.write_bytes(b"char *s = \"\xff\xfe\";\n")

    annotate_file(source, AnnotateOptions())

    assert source.read_bytes().endswith(b"char *s = \"\xff\xfe\";\n")


def test_failed_processing_keeps_original(tmp_path: Path) -> None:
    source = tmp_path / "a.c"
    source.write_text("int x;\n", encoding="utf-8")
    options = AnnotateOptions(boilerplate=str(tmp_path / "missing.txt"))

    with pytest.raises(BoilerplateError):
        annotate_file(source, options)

    assert source.read_text(encoding="utf-8") == "int x;\n"
    assert not (tmp_path / "a.c.tmp").exists()
    assert not (tmp_path / "a.c.bak").exists()


def test_missing_source_is_a_read_error(tmp_path: Path) -> None:
    with pytest.raises(ReadError):
        annotate_file(tmp_path / "missing.c", AnnotateOptions())


def test_annotate_binary_streams() -> None:
    output = io.BytesIO()
    annotate_binary(output, io.BytesIO(b"int x;\n"), AnnotateOptions())
    assert output.getvalue().endswith(b"*/\n\nint x;\n")
    assert not output.closed


@pytest.mark.skipif(not Path("/dev/full").exists(), reason="needs /dev/full")
def test_write_failure_during_processing_is_a_write_error(tmp_path: Path) -> None:
    source = tmp_path / "a.c"
    source.write_text("int x;\n", encoding="utf-8")
    (tmp_path / "a.c.tmp").symlink_to("/dev/full")

    with pytest.raises(WriteError):
        annotate_file(source, AnnotateOptions())

    assert source.read_text(encoding="utf-8") == "int x;\n"
    assert not (tmp_path / "a.c.tmp").is_symlink()
    assert not (tmp_path / "a.c.bak").exists()
