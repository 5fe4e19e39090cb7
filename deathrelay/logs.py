"""Locating game log files and formatting target lists."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

LOG_PREFIX = "output_log_"
LOG_SUFFIX = ".txt"

_ITEM_TEMPLATE = (
    '<li class="data-block">\n'
    '                    <div class="number">{number}</div>\n'
    '                    <div class="value">{value}</div>\n'
    "                </li>"
)


def get_log_dir(home: str | Path | None = None) -> Path | None:
    """Return the VRChat log directory under the given or current home."""
    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            return None
    return Path(home) / "AppData" / "LocalLow" / "VRChat" / "VRChat"


def find_latest_log_file(log_dir: str | Path) -> Path | None:
    """Return the most recently modified output log in the directory."""
    candidates = []
    try:
        entries = list(Path(log_dir).iterdir())
    except OSError:
        return None
    for entry in entries:
        name = entry.name
        if not (name.startswith(LOG_PREFIX) and name.endswith(LOG_SUFFIX)):
            continue
        try:
            candidates.append((entry.stat().st_mtime, entry))
        except OSError:
            continue
    if not candidates:
        return None
    return max(candidates, key=lambda item: item[0])[1]


def get_latest_log_file() -> str | None:
    """Return the path of the newest log file as a string, if any."""
    log_dir = get_log_dir()
    if log_dir is None:
        return None
    latest = find_latest_log_file(log_dir)
    return str(latest) if latest is not None else None


def split_and_format(text: str) -> str:
    """Render comma-separated names as numbered HTML list items."""
    items = (item.strip() for item in text.split(","))
    return "".join(
        _ITEM_TEMPLATE.format(number=number, value=item)
        for number, item in enumerate(filter(None, items), start=1)
    )


def open_explorer(path: str) -> Path | None:
    """Open the directory containing ``path`` in the file explorer."""
    print(f"open_explorer: {path}")
    target = Path(path)
    if not path or target.parent == target:
        print("Could not get parent directory from specified path", file=sys.stderr)
        return None
    parent = target.parent
    try:
        subprocess.run(["explorer", str(parent)], check=False)
    except OSError as exc:
        print(f"Error opening Explorer: {exc}", file=sys.stderr)
        return None
    return parent