"""Go module version models and classification."""

from .models import Module, RepositoryRule, VersionClass
from .pseudo import classify_version, pseudo_version_commit

__all__ = [
    "Module",
    "RepositoryRule",
    "VersionClass",
    "classify_version",
    "pseudo_version_commit",
]
