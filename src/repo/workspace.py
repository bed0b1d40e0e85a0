"""Private copies of go.mod for running ``go list``.

``go list`` tends to rewrite go.mod as a side effect. It is therefore only
ever run against a copy placed in a fresh temporary directory, and that
directory is removed on every exit path.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator

from constants import Constants

from .errors import ManifestCopyError, ManifestReadError, WorkspaceError

logger = logging.getLogger(__name__)


def copy_manifest_to_temp(manifest_path: str) -> str:
    """Copy a go.mod file into a new temporary directory.

    The copy is always named go.mod regardless of the source file name.
    If anything fails after the directory was created, the directory is
    removed before the error is raised. On success the caller owns the
    directory and must remove it.

    Args:
        manifest_path: Path to the go.mod file to copy.

    Returns:
        Path of the temporary directory holding the copy.

    Raises:
        ManifestReadError: The manifest cannot be opened.
        WorkspaceError: The temporary directory cannot be created.
        ManifestCopyError: Writing the copy failed.
    """
    try:
        source = open(manifest_path, "rb")  # pylint: disable=consider-using-with
    except OSError as e:
        raise ManifestReadError(f"Cannot read manifest {manifest_path}: {e}") from e

    with source:
        try:
            temp_dir = tempfile.mkdtemp(prefix=Constants.TEMP_DIR_PREFIX)
        except OSError as e:
            raise WorkspaceError(f"Cannot create temporary workspace: {e}") from e

        try:
            with open(os.path.join(temp_dir, Constants.GO_MOD_FILE), "wb") as copy:
                shutil.copyfileobj(source, copy)
        except OSError as e:
            discard_workspace(temp_dir)
            raise ManifestCopyError(f"Cannot copy {manifest_path} to {temp_dir}: {e}") from e

    logger.debug("Copied %s to %s", manifest_path, temp_dir)
    return temp_dir


def remove_workspace(temp_dir: str) -> None:
    """Remove a temporary workspace, raising WorkspaceError on failure."""
    try:
        shutil.rmtree(temp_dir)
    except OSError as e:
        raise WorkspaceError(f"Cannot remove temporary workspace {temp_dir}: {e}") from e
    logger.debug("Removed temporary workspace %s", temp_dir)


def discard_workspace(temp_dir: str) -> None:
    """Best-effort removal used while another error is propagating."""
    try:
        remove_workspace(temp_dir)
    except WorkspaceError as e:
        logger.warning("%s", e)


@contextmanager
def isolated_manifest(manifest_path: str) -> Iterator[str]:
    """Yield a temporary directory holding a copy of ``manifest_path``.

    The directory is removed when the block exits. A cleanup failure is
    only raised when the block itself succeeded; otherwise it is logged and
    the original error propagates.
    """
    temp_dir = copy_manifest_to_temp(manifest_path)
    try:
        yield temp_dir
    except BaseException:
        discard_workspace(temp_dir)
        raise
    else:
        remove_workspace(temp_dir)
