"""
Reads the tail of the user's shell history so the model knows what the user
has been doing. History is best-effort context: a missing, unreadable or
corrupt history file never stops a command from being suggested.
"""

import os
import re

from typing import List, Optional, Sequence

HISTORY_CANDIDATES = (".zsh_history", ".bash_history", ".history")

# zsh extended history: ": 1700000000:0;git status"
_ZSH_EXTENDED_ENTRY = re.compile(r"^: \d+:\d+;")


def _candidate_paths() -> List[str]:
    home = os.path.expanduser("~")
    return [os.path.join(home, name) for name in HISTORY_CANDIDATES]


def clean_history_line(line: str) -> str:
    """Strips the zsh extended-history timestamp prefix from a line."""
    return _ZSH_EXTENDED_ENTRY.sub("", line, count=1)


def read_history(lines: int, candidates: Optional[Sequence[str]] = None) -> List[str]:
    """
    Returns at most the last `lines` lines of the first readable history file.

    Args:
        lines: Maximum number of lines to return. 0 disables history.
        candidates: Paths to probe in order. Defaults to the zsh, bash and
            generic history files in the user's home directory.

    Returns:
        The most recent history lines, oldest first. Empty if no candidate
        exists or can be read.
    """
    if lines <= 0:
        return []

    if candidates is None:
        candidates = _candidate_paths()

    for path in candidates:
        if not os.path.isfile(path):
            continue
        try:
            with open(path, "rb") as history_file:
                raw = history_file.read()
        except OSError:
            # Exists but unreadable, try the next shell's history.
            continue

        content = raw.decode("utf-8", errors="replace")
        entries = content.split("\n")
        if entries[-1] == "":
            entries.pop()
        tail = [entry.rstrip("\r") for entry in entries[-lines:]]
        return [clean_history_line(line) for line in tail]

    return []
