import os
import subprocess
import logging
import time
from typing import Optional, Protocol, runtime_checkable

from .config import HostEntry

# Reachability probes: a single ICMP echo via the system 'ping', or a batch-mode
# 'ssh' handshake running a no-op command. Both report milliseconds or None and never raise.

# --- Configuration Constants ---
PING_COMMAND = "ping"
PING_ARGS = ["-c", "1"] # Send only 1 echo request
PING_TIMEOUT = 5 # seconds, upper bound on a single ping run

SSH_COMMAND = "ssh"
SSH_CONNECT_TIMEOUT = 3 # seconds, passed to ssh as ConnectTimeout
SSH_PROBE_TIMEOUT = 10 # seconds, upper bound on the whole probe run
SSH_PROBE_OPTIONS = [
    "-o", "BatchMode=yes", # No password prompts
    "-o", f"ConnectTimeout={SSH_CONNECT_TIMEOUT}",
    "-o", "PasswordAuthentication=no",
    "-o", "KbdInteractiveAuthentication=no",
    "-o", "PreferredAuthentications=publickey",
]
SSH_PROBE_REMOTE_COMMAND = "true"

PROBE_METHOD = "ssh" # "ssh" or "ping"


@runtime_checkable
class Prober(Protocol):
    """Anything that can measure one host's latency."""

    def probe(self, entry: HostEntry) -> Optional[float]:
        """Returns elapsed milliseconds, or None if the host could not be reached."""
        ...


def parse_ping_time(output: str) -> Optional[float]:
    """
    Extracts the round-trip time from ping output.
    Looks for the first line containing 'time=' and reads the token after it.
    """
    for line in output.splitlines():
        if "time=" not in line:
            continue
        token = line.split("time=", 1)[1].split()
        if not token:
            return None
        value = token[0].rstrip("ms") # Some platforms print 'time=12.3ms'
        try:
            return float(value)
        except ValueError:
            logging.debug(f"Could not parse ping time from '{line}'")
            return None
    return None


class PingProber:
    """Measures latency with a single ICMP echo request."""

    def probe(self, entry):
        command = [PING_COMMAND] + PING_ARGS + [entry.hostname]
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=PING_TIMEOUT,
                check=False
            )
        except FileNotFoundError:
            logging.error(f"Error: '{PING_COMMAND}' command not found. Make sure it's in your PATH.")
            return None
        except subprocess.TimeoutExpired:
            logging.warning(f"Ping to {entry.hostname} timed out after {PING_TIMEOUT}s.")
            return None
        except (OSError, subprocess.SubprocessError) as e:
            logging.error(f"Failed to execute ping for host {entry.hostname}: {e}")
            return None

        if result.returncode != 0:
            logging.warning(f"Host {entry.hostname} is unreachable (ping exit code {result.returncode}).")
            return None
        return parse_ping_time(result.stdout)


class SSHProber:
    """Times a non-interactive, key-only ssh connection that runs a no-op command."""

    def build_command(self, entry):
        command = [SSH_COMMAND] + SSH_PROBE_OPTIONS
        if entry.identity_file:
            command += ["-i", os.path.expanduser(entry.identity_file)]
        command += [entry.target, SSH_PROBE_REMOTE_COMMAND]
        return command

    def probe(self, entry):
        command = self.build_command(entry)
        start = time.monotonic()
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=SSH_PROBE_TIMEOUT,
                check=False
            )
        except FileNotFoundError:
            logging.error(f"Error: '{SSH_COMMAND}' command not found. Make sure OpenSSH client is installed.")
            return None
        except subprocess.TimeoutExpired:
            logging.warning(f"SSH probe to {entry.alias} timed out after {SSH_PROBE_TIMEOUT}s.")
            return None
        except (OSError, subprocess.SubprocessError) as e:
            logging.error(f"Failed to execute ssh probe for host {entry.alias}: {e}")
            return None
        elapsed_ms = (time.monotonic() - start) * 1000

        if result.returncode != 0:
            logging.warning(f"Host {entry.alias} is unreachable (ssh exit code {result.returncode}): {result.stderr.strip()}")
            return None
        return elapsed_ms


PROBERS = {
    "ping": PingProber,
    "ssh": SSHProber,
}


def get_prober(method=PROBE_METHOD):
    try:
        return PROBERS[method]()
    except KeyError:
        raise ValueError(f"Unknown probe method '{method}'. Choose from: {', '.join(sorted(PROBERS))}")


def probe_all(hosts, prober):
    """Probes every host serially in alias order, storing each result on the entry."""
    print(f"Measuring latency for {len(hosts)} hosts...")
    for alias in sorted(hosts):
        entry = hosts[alias]
        entry.record_probe(prober.probe(entry))
        print(f"  -> {alias}: {entry.latency_label()}")
        if entry.latency is None:
            logging.info(f"No latency measurement for '{alias}'")
        else:
            logging.info(f"Latency for '{alias}': {entry.latency:.1f} ms")
