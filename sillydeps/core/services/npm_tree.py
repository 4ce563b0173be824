"""
npm tree resolver: obtains the installed dependency tree.

Runs ``npm ls --json --all --silent`` in the project root and parses its
output. Every failure surfaces as ``ResolvedTreeUnavailable`` so the
scan can fall back to a direct-only audit.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path

from sillydeps.core.errors import ResolvedTreeUnavailable

logger = logging.getLogger(__name__)

NPM_LS_ARGS = ["ls", "--json", "--all", "--silent"]


def _run(
    args: list[str],
    cwd: Path,
    timeout: int = 120,
) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result."""
    return subprocess.run(
        args,
        cwd=str(cwd),
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def parse_tree(output: str, source: str = "npm ls") -> dict:
    """Parse tree JSON, requiring a top-level object.

    Raises:
        ResolvedTreeUnavailable: If the output is empty, not JSON, or
            not an object.
    """
    if not output.strip():
        raise ResolvedTreeUnavailable(f"{source} produced no output")
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise ResolvedTreeUnavailable(f"{source} output is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ResolvedTreeUnavailable(
            f"{source} output must be a JSON object, got {type(data).__name__}"
        )
    return data


class NpmTreeResolver:
    """Lists the installed tree with npm.

    Args:
        npm_command: npm executable name or path.
        timeout: Seconds before the listing is abandoned.
    """

    def __init__(self, npm_command: str = "npm", timeout: int = 120):
        self.npm_command = npm_command
        self.timeout = timeout

    def is_available(self) -> bool:
        return shutil.which(self.npm_command) is not None

    def resolve(self, project_root: Path) -> dict:
        """Return the parsed ``npm ls`` tree for a project.

        npm exits non-zero on problems such as missing peers while still
        printing the full tree, so any parseable object is accepted.

        Raises:
            ResolvedTreeUnavailable: If npm is missing, times out, or
                prints no usable tree.
        """
        if not self.is_available():
            raise ResolvedTreeUnavailable(f"'{self.npm_command}' not found on PATH")

        args = [self.npm_command, *NPM_LS_ARGS]
        logger.debug("Executing: %s (cwd=%s)", " ".join(args), project_root)

        try:
            result = _run(args, cwd=project_root, timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            raise ResolvedTreeUnavailable(
                f"'{self.npm_command} ls' timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise ResolvedTreeUnavailable(f"Cannot run '{self.npm_command}': {e}") from e

        if result.returncode != 0:
            logger.info(
                "%s ls exited with code %d: %s",
                self.npm_command, result.returncode, result.stderr.strip()[:200],
            )

        return parse_tree(result.stdout, source=f"{self.npm_command} ls")


def load_tree_file(path: Path) -> dict:
    """Read a pre-computed ``npm ls --json`` tree from disk.

    Raises:
        ResolvedTreeUnavailable: If the file is missing, unreadable or
            malformed.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResolvedTreeUnavailable(f"Cannot read tree file {path}: {e}") from e
    return parse_tree(raw, source=str(path))
