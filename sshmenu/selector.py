import logging

from tabulate import tabulate

from .probe import probe_all

# Presents the hosts as a numbered text menu. Entry 0 re-measures latencies and
# redraws the menu; a host number ends the loop with that alias.

# --- Configuration Constants ---
MENU_TITLE = "✨ Select a host to SSH into ✨"
MENU_HEADERS = ["#", "Host", "User", "Latency"]
REFRESH_INDEX = 0
REFRESH_LABEL = "↻ Refresh latencies"
REFRESH_KEYS = ("r",)
QUIT_KEYS = ("q", "quit", "exit")


def build_menu_rows(hosts):
    """Returns table rows: the refresh action first, then hosts sorted by alias."""
    rows = [[REFRESH_INDEX, REFRESH_LABEL, "", ""]]
    for index, alias in enumerate(sorted(hosts), 1):
        entry = hosts[alias]
        rows.append([index, alias, entry.username or "", entry.latency_label()])
    return rows


def render_menu(hosts):
    return tabulate(build_menu_rows(hosts), headers=MENU_HEADERS, tablefmt="simple")


def select_host(hosts, prober, input_func=input):
    """
    Runs the interactive selection loop.
    Returns the chosen alias, or None if the user quits or aborts the prompt.
    """
    aliases = sorted(hosts)
    prompt = f"Enter number ({REFRESH_INDEX}-{len(aliases)}, q to quit): "

    while True:
        print(f"\n{MENU_TITLE}\n")
        print(render_menu(hosts))
        print()

        while True:
            try:
                choice = input_func(prompt).strip().lower()
            except (EOFError, KeyboardInterrupt):
                print()
                logging.info("Host selection aborted.")
                return None

            if choice in QUIT_KEYS:
                return None

            if choice in REFRESH_KEYS:
                break

            try:
                index = int(choice)
            except ValueError:
                print("Invalid input. Please enter a number or 'q'.")
                continue

            if index == REFRESH_INDEX:
                break
            if 1 <= index <= len(aliases):
                selected = aliases[index - 1]
                logging.info(f"Selected host '{selected}'")
                return selected
            print("Invalid number. Please try again.")

        probe_all(hosts, prober)
