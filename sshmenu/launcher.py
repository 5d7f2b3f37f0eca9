import os
import subprocess
import logging
from typing import List, Protocol, runtime_checkable

# Hands the terminal over to an interactive ssh session for the chosen host.

# --- Configuration Constants ---
SSH_COMMAND = "ssh"


class LaunchError(Exception):
    """Raised when the ssh client process cannot be started."""


@runtime_checkable
class SessionRunner(Protocol):
    def run(self, command: List[str]) -> int:
        """Runs the command attached to the current terminal and returns its exit status."""
        ...


class SubprocessSessionRunner:
    """Runs the session in the foreground, inheriting stdin, stdout and stderr."""

    def run(self, command):
        # Blocks until the SSH session is closed
        return subprocess.call(command)


def build_ssh_command(entry):
    command = [SSH_COMMAND]
    if entry.identity_file:
        command += ["-i", os.path.expanduser(entry.identity_file)]
    command.append(entry.target)
    return command


def launch(entry, runner=None):
    """
    Connects to the given host.
    The remote exit status is returned but not treated as an error;
    failing to start the ssh client raises LaunchError.
    """
    if runner is None:
        runner = SubprocessSessionRunner()

    command = build_ssh_command(entry)
    print(f"Attempting to connect to {entry.alias}...")
    print(f"Executing command: {' '.join(command)}")

    try:
        exit_code = runner.run(command)
    except FileNotFoundError:
        raise LaunchError(f"'{SSH_COMMAND}' command not found. Make sure OpenSSH client is installed and in your system's PATH.")
    except OSError as e:
        raise LaunchError(f"Could not start ssh session to {entry.alias}: {e}")

    if exit_code != 0:
        logging.info(f"SSH session to {entry.alias} ended with exit code {exit_code}")
    return exit_code
