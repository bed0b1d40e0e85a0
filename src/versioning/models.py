"""Data models for Go modules and the repository rules derived from them."""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Module:
    """One record of ``go list -m -json all`` output."""
    path: str
    version: str = ""
    main: bool = False

    @classmethod
    def from_json(cls, record: Dict[str, Any]) -> "Module":
        """Build a Module from a decoded JSON object, ignoring unknown keys."""
        return cls(
            path=record.get("Path") or "",
            version=record.get("Version") or "",
            main=bool(record.get("Main", False)),
        )


@dataclass
class VersionClass:
    """Outcome of classifying a module version: a commit or a tag, never both."""
    commit: str = ""
    tag: str = ""

    @property
    def is_pseudo(self) -> bool:
        return bool(self.commit)


@dataclass
class RepositoryRule:
    """How a build system should fetch one external dependency."""
    name: str
    importpath: str
    commit: str = ""
    tag: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
