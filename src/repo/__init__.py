"""Import of repository rules from Go module manifests."""

from .errors import (
    ManifestCopyError,
    ManifestReadError,
    ModuleDecodeError,
    ModuleImportError,
    ResolverError,
    WorkspaceError,
)
from .modules import import_repo_rules_modules, iter_modules

__all__ = [
    "ManifestCopyError",
    "ManifestReadError",
    "ModuleDecodeError",
    "ModuleImportError",
    "ResolverError",
    "WorkspaceError",
    "import_repo_rules_modules",
    "iter_modules",
]
