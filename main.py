"""Entry point for Fitness Club Manager.

Creates the application directories and the roster, then runs the main window.
A crash traceback is appended to the error log before the process exits.
"""

from __future__ import annotations

import sys
import traceback

import config
from roster import Roster
from utils import get_current_datetime, log_activity


def _log_crash(tb_text: str) -> None:
    try:
        config.LOGS_DIR.mkdir(parents=True, exist_ok=True)
        with open(config.ERROR_LOG_PATH, "a", encoding="utf-8") as f:
            f.write("\n" + "=" * 80 + "\n")
            f.write(get_current_datetime() + "\n")
            f.write(tb_text + "\n")
    except OSError:
        pass


def main() -> int:
    """Run the application. Returns the process exit code."""

    config.init_directories()
    roster = Roster()
    log_activity("startup", f"{config.APP_NAME} v{config.VERSION}")

    try:
        from main_window import MainWindow

        MainWindow(roster).run()
    except Exception:
        tb_text = traceback.format_exc()
        _log_crash(tb_text)
        print(tb_text, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
