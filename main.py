"""
Design (main.py)
- Purpose: Launch the student roster: logging, record store, Tk window.
- Side effects: Reads the record file at startup; runs the Tk main loop.
"""

import logging
import tkinter as tk

from roster.logs import configure_logging
from roster.repository import Repo
from roster.storage import get_records_path
from roster.ui import AppUI

log = logging.getLogger("roster")


def main() -> None:
    configure_logging()
    repo = Repo(get_records_path())
    result = repo.load()
    if not result.ok:
        log.error("Starting with an empty roster: %s", result.error)

    root = tk.Tk()
    AppUI(root, repo)
    root.mainloop()


if __name__ == "__main__":
    main()
