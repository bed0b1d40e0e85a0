"""Pseudo-version detection for Go module versions.

Per ``go help modules`` there are three pseudo-version forms:

    vX.0.0-yyyymmddhhmmss-abcdefabcdef
        no earlier versioned commit with an appropriate major version
        (also used by older go.mod files for commits that follow tags)
    vX.Y.Z-pre.0.yyyymmddhhmmss-abcdefabcdef
        most recent versioned commit before the target is vX.Y.Z-pre
    vX.Y.(Z+1)-0.yyyymmddhhmmss-abcdefabcdef
        most recent versioned commit before the target is vX.Y.Z

A single pattern matches all three. Only the trailing commit fragment is
consumed downstream, so the form that matched and the base version are
discarded on purpose.

The pattern is applied with ``fullmatch``, which is what pins the commit
fragment to the very end of the string: a trailing newline never matches.
"""

import re

from constants import Constants

from .models import VersionClass

PSEUDO_VERSION_RE = re.compile(r"^(.*?)[-.]((?:0\.|)[0-9]{14})-([a-fA-F0-9]{12})$")


def pseudo_version_commit(version: str) -> str:
    """Return the 12-hex-digit commit of a pseudo-version, or '' if it is not one."""
    match = PSEUDO_VERSION_RE.fullmatch(version)
    if match is None:
        return ""
    return match.group(3)


def classify_version(version: str) -> VersionClass:
    """Classify a module version as a commit (pseudo-version) or a tag.

    Anything that is not a pseudo-version is a tag, including malformed
    strings; the only rewrite applied to tags is dropping a trailing
    ``+incompatible`` marker.

    Args:
        version: Module version as reported by ``go list``.

    Returns:
        VersionClass with exactly one of ``commit`` / ``tag`` set.
    """
    commit = pseudo_version_commit(version)
    if commit:
        return VersionClass(commit=commit)
    tag = version
    if tag.endswith(Constants.INCOMPATIBLE_SUFFIX):
        tag = tag[: -len(Constants.INCOMPATIBLE_SUFFIX)]
    return VersionClass(tag=tag)
