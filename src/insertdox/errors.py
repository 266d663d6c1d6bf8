"""Exceptions and process exit codes."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    ok = 0
    read_failed = 1
    write_failed = 2
    backup_failed = 3
    rename_failed = 4
    boilerplate_missing = 5
    allocation_failed = 6
    invalid_config = 7


class InsertdoxError(Exception):
    exit_code = ExitCode.read_failed

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ReadError(InsertdoxError):
    exit_code = ExitCode.read_failed


class WriteError(InsertdoxError):
    exit_code = ExitCode.write_failed


class BackupError(InsertdoxError):
    exit_code = ExitCode.backup_failed


class RenameError(InsertdoxError):
    exit_code = ExitCode.rename_failed


class BoilerplateError(InsertdoxError):
    """The boilerplate file cannot be read; fatal to the whole run."""

    exit_code = ExitCode.boilerplate_missing


class AllocationError(InsertdoxError):
    exit_code = ExitCode.allocation_failed


class ConfigError(InsertdoxError):
    exit_code = ExitCode.invalid_config
