"""Thin wrapper around :func:`subprocess.run` shared by probes and adapters."""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)

CommandResult = tuple[str, str, int]
CommandRunner = Callable[..., CommandResult]


class CommandUnavailable(Exception):
    """The executable could not be started or did not finish in time."""


def run_command(
    command: Sequence[str],
    cwd: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Execute *command* and return ``(stdout, stderr, return_code)``.

    Args:
        command: The command to execute as a list of strings.
        cwd: The working directory for the command.
        env: Full replacement environment, or ``None`` to inherit.
        timeout: Seconds to wait before giving up.

    Raises:
        CommandUnavailable: The executable is missing, cannot be started
            or timed out.
    """
    logger.debug("Running %s in %s", " ".join(command), cwd or ".")
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            env=dict(env) if env is not None else None,
            check=False,
            cwd=cwd,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise CommandUnavailable(f"Command not found: {exc.filename or command[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandUnavailable(
            f"Command timed out after {exc.timeout}s: {' '.join(command)}"
        ) from exc
    except OSError as exc:
        # Not executable, bad working directory, ...
        raise CommandUnavailable(f"Cannot run {command[0]}: {exc}") from exc
    return result.stdout, result.stderr, result.returncode
