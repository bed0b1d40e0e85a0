"""Errors raised while importing repository rules from a go.mod file."""

from typing import Optional


class ModuleImportError(RuntimeError):
    """Base class for every failure of a go.mod import."""


class ManifestReadError(ModuleImportError):
    """The go.mod file is missing or unreadable."""


class WorkspaceError(ModuleImportError):
    """The temporary workspace could not be created or removed."""


class ManifestCopyError(ModuleImportError):
    """Copying go.mod into the temporary workspace failed."""


class ResolverError(ModuleImportError):
    """``go list`` could not be started or exited with a failure."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class ModuleDecodeError(ModuleImportError):
    """``go list`` output contained a malformed module record."""
