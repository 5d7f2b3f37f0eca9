import os
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

# Reads ~/.ssh/config into a registry of HostEntry objects keyed by alias.
# Only four directives are understood: Host, Hostname, User and IdentityFile.

# --- Configuration Constants ---
SSH_CONFIG_PATH = "~/.ssh/config"

HOST_DIRECTIVE = "Host "
HOSTNAME_DIRECTIVES = ("Hostname ", "HostName ") # OpenSSH documents it as HostName
USER_DIRECTIVE = "User "
IDENTITY_FILE_DIRECTIVE = "IdentityFile "
WILDCARD_CHARS = ("*", "?")


# --- Errors ---

class ConfigError(Exception):
    """Raised when the SSH config cannot be located or read."""


class ConfigNotFoundError(ConfigError):
    pass


class ConfigReadError(ConfigError):
    pass


# --- Data Structures ---

class LatencyStatus(Enum):
    UNPROBED = "unprobed"
    UNREACHABLE = "unreachable"
    MEASURED = "measured"


@dataclass
class HostEntry:
    """
    One Host block from the SSH config.

    Attributes:
        alias: Name following the Host directive, unique within a registry.
        hostname: Real network name, falls back to the alias.
        username: Optional login name from the User directive.
        identity_file: Optional key path from the IdentityFile directive.
        status: Whether the host was never probed, probed and unreachable, or measured.
        latency: Round-trip time in milliseconds, only set when status is MEASURED.
    """

    alias: str
    hostname: str = ""
    username: Optional[str] = None
    identity_file: Optional[str] = None
    status: LatencyStatus = LatencyStatus.UNPROBED
    latency: Optional[float] = None

    def __post_init__(self):
        if not self.hostname:
            self.hostname = self.alias

    @property
    def target(self) -> str:
        """user@hostname when a username is configured, otherwise the bare hostname."""
        if self.username:
            return f"{self.username}@{self.hostname}"
        return self.hostname

    def record_probe(self, latency_ms: Optional[float]):
        """Stores the outcome of the latest probe, replacing any earlier one."""
        if latency_ms is None:
            self.status = LatencyStatus.UNREACHABLE
            self.latency = None
        else:
            self.status = LatencyStatus.MEASURED
            self.latency = latency_ms

    def latency_label(self) -> str:
        if self.status is LatencyStatus.MEASURED:
            return f"{self.latency:.1f} ms"
        if self.status is LatencyStatus.UNREACHABLE:
            return "unreachable"
        return ""


# --- Helper Functions ---

def default_config_path():
    """Expands SSH_CONFIG_PATH, failing if the home directory cannot be resolved."""
    home_dir = os.path.expanduser("~")
    if home_dir.startswith("~"):
        raise ConfigNotFoundError("Home directory not found")
    return os.path.expanduser(SSH_CONFIG_PATH)


def _is_wildcard(alias):
    return alias.startswith("!") or any(c in alias for c in WILDCARD_CHARS)


def _directive_value(line, prefixes):
    """Returns the stripped value after the first matching prefix, or None."""
    if isinstance(prefixes, str):
        prefixes = (prefixes,)
    for prefix in prefixes:
        if line.startswith(prefix):
            return line[len(prefix):].strip() or None
    return None


def parse_config_lines(lines: Iterable[str]) -> Dict[str, HostEntry]:
    """
    Single-pass scan of SSH config lines.
    A Host line opens a fresh entry (replacing any earlier block with the same alias)
    and the directives that follow attach to it until the next Host line.
    Anything unrecognised is ignored.
    """
    hosts = {}
    current = None

    for raw_line in lines:
        line = raw_line.strip()

        if line.startswith(HOST_DIRECTIVE):
            alias = line[len(HOST_DIRECTIVE):].strip()
            if not alias or _is_wildcard(alias):
                logging.debug(f"Ignoring host pattern '{alias}'")
                current = None
                continue
            current = HostEntry(alias=alias)
            hosts[alias] = current
            logging.debug(f"Found host block '{alias}'")
            continue

        if current is None:
            continue # Directive outside of any usable Host block

        hostname = _directive_value(line, HOSTNAME_DIRECTIVES)
        if hostname:
            current.hostname = hostname
            continue

        username = _directive_value(line, USER_DIRECTIVE)
        if username:
            current.username = username
            continue

        identity_file = _directive_value(line, IDENTITY_FILE_DIRECTIVE)
        if identity_file:
            current.identity_file = identity_file

    return hosts


def parse_ssh_config(config_path=None) -> Dict[str, HostEntry]:
    """Reads the SSH config file and returns a dict of alias -> HostEntry."""
    if config_path is None:
        config_path = default_config_path()
    expanded_path = os.path.expanduser(config_path)

    try:
        with open(expanded_path, 'r', encoding='utf-8') as f:
            hosts = parse_config_lines(f)
    except FileNotFoundError:
        raise ConfigNotFoundError(f"SSH config file not found at {expanded_path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Could not read SSH config file {expanded_path}: {e}")

    logging.info(f"Loaded {len(hosts)} hosts from {expanded_path}")
    return hosts
