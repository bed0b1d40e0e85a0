"""Import of repository rules from a go.mod file via ``go list``."""

from __future__ import annotations

import json
import logging
import re
from typing import Callable, Iterator, List, Union

from common.logging_utils import extra_context, is_debug_enabled
from versioning.models import Module, RepositoryRule

from .errors import ModuleDecodeError
from .golist import go_list_modules
from .naming import import_path_to_repo_name
from .rules import NameFn, to_repo_rule
from .workspace import isolated_manifest

logger = logging.getLogger(__name__)

ListModulesFn = Callable[[str], bytes]

_WHITESPACE = re.compile(r"\s*")
_DECODER = json.JSONDecoder()

# go list fields consumed here and the JSON types they must have (null is allowed).
_FIELD_TYPES = (("Path", str), ("Version", str), ("Main", bool))


def _check_field_types(record: dict) -> None:
    for key, expected in _FIELD_TYPES:
        value = record.get(key)
        if value is not None and not isinstance(value, expected):
            raise ModuleDecodeError(
                f"Module field {key} must be {expected.__name__}, got {type(value).__name__}"
            )


def iter_modules(data: Union[bytes, str]) -> Iterator[Module]:
    """Lazily decode a stream of concatenated JSON module records.

    ``go list -json`` prints one object per module with no separator
    other than whitespace. Records are decoded one at a time, so a
    malformed record raises as soon as it is reached.

    Raises:
        ModuleDecodeError: The stream is not valid UTF-8, or a record is
            malformed, not a JSON object, or has a field of the wrong type.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ModuleDecodeError(f"go list output is not valid UTF-8: {e}") from e
    else:
        text = data

    pos = _WHITESPACE.match(text, 0).end()
    while pos < len(text):
        try:
            record, pos = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise ModuleDecodeError(f"Malformed module record: {e}") from e
        if not isinstance(record, dict):
            raise ModuleDecodeError(
                f"Expected a module object, got {type(record).__name__}"
            )
        _check_field_types(record)
        yield Module.from_json(record)
        pos = _WHITESPACE.match(text, pos).end()


def import_repo_rules_modules(
    manifest_path: str,
    list_modules: ListModulesFn = go_list_modules,
    name_fn: NameFn = import_path_to_repo_name,
) -> List[RepositoryRule]:
    """Build repository rules for every dependency listed by go.mod.

    ``go list`` runs against a private copy of the manifest. The main
    module is skipped and resolver order is preserved.

    Args:
        manifest_path: Path to the go.mod file.
        list_modules: Runs the module listing in a directory and returns
            its raw output; tests substitute a fake.
        name_fn: Maps an import path to a repository name.

    Returns:
        Repository rules in the order ``go list`` reported them.

    Raises:
        ModuleImportError: Any failure; no partial result is returned.
    """
    repos: List[RepositoryRule] = []
    with isolated_manifest(manifest_path) as temp_dir:
        data = list_modules(temp_dir)
        for mod in iter_modules(data):
            if mod.main:
                logger.debug("Skipping main module %s", mod.path)
                continue
            repos.append(to_repo_rule(mod, name_fn))

    if is_debug_enabled(logger):
        logger.debug(
            "Imported repository rules",
            extra=extra_context(
                event="function_exit",
                component="repo",
                action="import_repo_rules_modules",
                target=manifest_path,
                count=len(repos),
            ),
        )
    return repos
