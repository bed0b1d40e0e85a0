"""Mapping of decoded Go modules onto repository rules."""

from typing import Callable

from versioning.models import Module, RepositoryRule
from versioning.pseudo import classify_version

from .naming import import_path_to_repo_name

NameFn = Callable[[str], str]


def to_repo_rule(module: Module, name_fn: NameFn = import_path_to_repo_name) -> RepositoryRule:
    """Build the repository rule for one module.

    Args:
        module: Decoded module record.
        name_fn: Maps an import path to a repository name.

    Returns:
        RepositoryRule pinned to either a commit or a tag.
    """
    revision = classify_version(module.version)
    return RepositoryRule(
        name=name_fn(module.path),
        importpath=module.path,
        commit=revision.commit,
        tag=revision.tag,
    )
