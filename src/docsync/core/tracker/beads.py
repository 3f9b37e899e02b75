"""
Live beads access through the `bd` CLI.

Wraps `bd show <id> --json` and parses its output into Issue models. Every
way the CLI can fail to answer (not installed, non-zero exit, timeout,
unparsable or empty output) is reported as a distinct error so the reader
can decide whether to fall back to the snapshot.
"""

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import IssueNotFoundError, MalformedDataError, ToolUnavailableError
from .models import DataSource, Issue

logger = logging.getLogger(__name__)

DEFAULT_BD_COMMAND = "bd"
DEFAULT_TIMEOUT_SECONDS = 60.0


class BeadsCli:
    """
    Thin client for the beads CLI (`bd`).

    Example:
        >>> bd = BeadsCli(project_dir=Path("."))
        >>> issue = bd.show("haxe.rust-4jb")
        >>> [dep.status for dep in issue.dependencies]
        ['closed', 'open']
    """

    def __init__(
        self,
        project_dir: Path | None = None,
        command: str = DEFAULT_BD_COMMAND,
        timeout: float | None = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the client.

        Args:
            project_dir: Directory to run bd in (defaults to current directory)
            command: Executable name or path of the beads CLI
            timeout: Seconds to wait for bd; None blocks until it exits
        """
        self.project_dir = project_dir or Path.cwd()
        self.command = command
        self.timeout = timeout

    def _run_bd(self, args: list[str]) -> Any:
        """
        Run a bd command and parse its stdout as JSON.

        Raises:
            ToolUnavailableError: If bd is missing, fails, times out or prints nothing
            MalformedDataError: If bd prints something that is not JSON
        """
        cmd = [self.command] + args
        logger.debug("Running %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ToolUnavailableError(
                f"beads CLI ({self.command}) is not installed or not on PATH", command=cmd
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ToolUnavailableError(
                f"bd command timed out after {self.timeout}s: {' '.join(cmd)}", command=cmd
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.strip() if e.stderr else ""
            message = f"bd command failed: {' '.join(cmd)}"
            if stderr:
                message += f"\nError: {stderr}"
            raise ToolUnavailableError(message, command=cmd, stderr=stderr) from e
        except OSError as e:
            raise ToolUnavailableError(f"Could not run {' '.join(cmd)}: {e}", command=cmd) from e

        if not result.stdout or not result.stdout.strip():
            raise ToolUnavailableError(f"bd printed no output: {' '.join(cmd)}", command=cmd)

        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise MalformedDataError(
                f"Invalid JSON from: {' '.join(cmd)} ({e})\nOutput: {result.stdout[:200]}"
            ) from e

    def show(self, issue_id: str) -> Issue:
        """
        Fetch one issue with its dependencies already expanded by beads.

        `bd show --json` answers with a one-element array holding the issue
        object; any other shape is treated as "not found".

        Raises:
            ToolUnavailableError: If bd could not be run
            MalformedDataError: If the issue object fails validation
            IssueNotFoundError: If bd did not return exactly one issue object
        """
        parsed = self._run_bd(["show", issue_id, "--json"])

        if not isinstance(parsed, list) or len(parsed) != 1 or not isinstance(parsed[0], dict):
            logger.debug("bd show %s returned no single issue object: %r", issue_id, parsed)
            raise IssueNotFoundError(issue_id, DataSource.BEADS.value)

        raw_issue = parsed[0]
        try:
            issue = Issue.model_validate(raw_issue)
        except ValidationError as e:
            raise MalformedDataError(f"Invalid issue from bd show {issue_id}: {e}") from e

        return issue.model_copy(
            update={"dependencies": [dep.with_defaults() for dep in issue.dependencies]}
        )
