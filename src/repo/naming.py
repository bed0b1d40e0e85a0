"""Default mapping from a Go import path to a Bazel-safe repository name."""


def import_path_to_repo_name(importpath: str) -> str:
    """Derive a repository name from an import path.

    The host labels are reversed and every separator becomes an
    underscore, e.g. ``github.com/foo/bar-baz`` -> ``com_github_foo_bar_baz``.

    Args:
        importpath: Go import path of the module.

    Returns:
        Repository name made of lowercase letters, digits and underscores.
    """
    components = importpath.lower().split("/")
    labels = components[0].split(".")
    labels.reverse()
    repo = ".".join(labels + components[1:])
    return repo.replace("-", "_").replace(".", "_")
