"""Attendance Sync

Command to run:
    python3 -m venv .venv && . .venv/bin/activate
    pip install -e .
    python main.py settings            # store Basic Auth + token once
    python main.py submit --user-id 12345 --username jdoe --kind in
    python main.py dashboard           # interactive session with history

Environment variables (.env). If missing, a commented template is created:
  API_BASE_URL="https://ddc.fis.vn"
  HISTORY_LIMIT=15
  CREDENTIALS_FILE=".attendance_credentials.json"
  USER_ID=""
  USERNAME=""
"""

from __future__ import annotations

import pathlib
import sys

SRC_PATH = pathlib.Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from attendance_sync.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
