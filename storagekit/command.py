"""Running external programs and collecting their output."""

from __future__ import annotations

import shlex
import subprocess
import sys

SMARTCTL_TIMEOUT = 6.0


class CommandError(Exception):
    """An external program exited with a non-zero status."""

    def __init__(self, message: str, returncode: int = 1, output: bytes = b"") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _echo(text: str) -> None:
    print(text, file=sys.stderr)


def execute_command(name: str, *args: str) -> bytes:
    """Run a program and return its standard output.

    A non-zero exit raises :class:`CommandError` carrying the program's
    standard error as its message.
    """
    argv = [name, *args]
    _echo(shlex.join(argv))
    completed = subprocess.run(argv, capture_output=True, check=False)
    _echo(_decode(completed.stdout))
    if completed.returncode != 0:
        message = _decode(completed.stderr)
        _echo(message)
        raise CommandError(message, completed.returncode, completed.stdout or b"")
    return completed.stdout or b""


def only_exec(cmd: str) -> str:
    """Run a shell command and return its combined stdout and stderr."""
    argv = ["/bin/bash", "-c", cmd]
    _echo(shlex.join(argv))
    completed = subprocess.run(
        argv, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False
    )
    text = _decode(completed.stdout)
    _echo(text)
    if completed.returncode != 0:
        raise CommandError(text, completed.returncode, completed.stdout or b"")
    return text


def exec_result_str(cmd: str) -> str:
    """Run a shell command and return its standard output."""
    argv = ["/bin/bash", "-c", cmd]
    _echo(shlex.join(argv))
    completed = subprocess.run(argv, stdout=subprocess.PIPE, check=False)
    text = _decode(completed.stdout)
    if completed.returncode != 0:
        raise CommandError(
            f"exit status {completed.returncode}", completed.returncode, completed.stdout or b""
        )
    return text


def exec_smartctl_by_path(path: str) -> bytes:
    """Return smartctl's JSON report for a device, or whatever it managed to print.

    Failures and timeouts are reported on the console, not raised.
    """
    argv = ["smartctl", "-a", "-n", "standby", path, "-j"]
    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=SMARTCTL_TIMEOUT,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        output = exc.output or b""
        print("smartctl", "timed out")
        print("smartctl", path)
        print("smartctl", len(output))
        return output
    except OSError as exc:
        print("smartctl", exc)
        print("smartctl", path)
        print("smartctl", 0)
        return b""
    output = completed.stdout or b""
    if completed.returncode != 0:
        print("smartctl", f"exit status {completed.returncode}")
        print("smartctl", path)
        print("smartctl", len(output))
    return output


def exec_enabled_smart(path: str) -> bytes:
    """Switch SMART on for a device and return smartctl's combined output."""
    completed = subprocess.run(
        ["smartctl", "-s", "on", path],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=False,
    )
    output = completed.stdout or b""
    if completed.returncode != 0:
        raise CommandError(_decode(output), completed.returncode, output)
    return output


def _lsblk(argv: list[str]) -> bytes | None:
    try:
        completed = subprocess.run(
            argv, stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=False
        )
    except OSError as exc:
        print("lsblk", exc)
        return None
    if completed.returncode != 0:
        print("lsblk", f"exit status {completed.returncode}")
        return None
    return completed.stdout or b""


def exec_lsblk_by_path(path: str) -> bytes | None:
    """Return lsblk's JSON description of one device, or None on failure."""
    return _lsblk(["lsblk", path, "-O", "-J", "-b"])


def exec_lsblk() -> bytes | None:
    """Return lsblk's JSON description of all block devices, or None on failure."""
    return _lsblk(["lsblk", "-O", "-J", "-b"])