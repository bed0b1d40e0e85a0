"""Location and invocation of the ``go`` tool."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Mapping, Optional

from constants import Constants

from .errors import ResolverError

logger = logging.getLogger(__name__)


def find_go_tool(environ: Optional[Mapping[str, str]] = None, platform: Optional[str] = None) -> str:
    """Locate the go executable.

    If GOROOT is set, the binary under it is preferred; otherwise PATH is
    searched. A wrapper invoked by Bazel sets GOROOT to the configured SDK,
    which must win over any host SDK.

    Args:
        environ: Environment to inspect; defaults to ``os.environ``.
        platform: Platform name in ``sys.platform`` form; defaults to the current one.

    Returns:
        Path or bare command name of the go tool.
    """
    environ = os.environ if environ is None else environ
    platform = sys.platform if platform is None else platform

    path = Constants.GO_TOOL
    goroot = environ.get(Constants.ENV_GOROOT)
    if goroot is not None:
        path = os.path.join(goroot, "bin", Constants.GO_TOOL)
    if platform == "win32":
        path += ".exe"
    return path


def go_list_modules(work_dir: str, go_tool: Optional[str] = None) -> bytes:
    """Run ``go list -m -json all`` in a directory containing go.mod.

    stderr is passed through to this process; stdout is returned as-is.
    The call blocks until the tool exits and is never retried.

    Args:
        work_dir: Directory holding the go.mod copy.
        go_tool: Explicit go executable; located with find_go_tool() if omitted.

    Returns:
        Raw stdout of the tool.

    Raises:
        ResolverError: The tool could not be started or exited non-zero.
    """
    go_tool = go_tool or find_go_tool()
    cmd = [go_tool] + Constants.GO_LIST_ARGS
    logger.debug("Running %s in %s", " ".join(cmd), work_dir)
    try:
        result = subprocess.run(  # noqa: S603
            cmd,
            cwd=work_dir,
            stdout=subprocess.PIPE,
            stdin=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        raise ResolverError(f"Cannot run {go_tool}: {e}") from e

    if result.returncode != 0:
        raise ResolverError(
            f"{' '.join(cmd)} exited with status {result.returncode}",
            returncode=result.returncode,
        )
    return result.stdout
