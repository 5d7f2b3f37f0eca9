#!/usr/bin/env python3

import sys
import logging

from .config import ConfigError, default_config_path, parse_ssh_config
from .launcher import LaunchError, launch
from .probe import get_prober
from .selector import select_host

# Reads your SSH configuration file, presents the hosts in a text-based menu
# (optionally annotated with latency), and connects to the selected host with 'ssh'.

# --- Logging Setup ---
LOG_LEVEL = logging.WARNING # Change to logging.DEBUG for more verbose output
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(level=LOG_LEVEL):
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def main(config_path=None, prober=None, runner=None, input_func=input):
    """Runs the parse -> select -> connect flow. Returns the process exit code."""
    setup_logging()

    try:
        if config_path is None:
            config_path = default_config_path()
        hosts = parse_ssh_config(config_path)
    except ConfigError as e:
        logging.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        print("Please ensure your SSH config file exists and the path is correct.", file=sys.stderr)
        return 1

    if not hosts:
        print(f"No hosts found in {config_path}")
        return 0

    if prober is None:
        prober = get_prober()

    selected_host = select_host(hosts, prober, input_func=input_func)
    if selected_host is None:
        print("No host selected.")
        return 0

    print(f"\nSelected host: {selected_host}")
    try:
        launch(hosts[selected_host], runner=runner)
    except LaunchError as e:
        logging.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
