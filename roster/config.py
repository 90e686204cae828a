"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (window, table columns, file names, logging).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

WINDOW_TITLE = "Student Management System"
WINDOW_SIZE = "800x600"

# (key, heading) in display order
TABLE_COLUMNS = (
    ("name", "Name"),
    ("roll_number", "Roll Number"),
    ("grade", "Grade"),
    ("email", "Email"),
)

# Persistence: filename for the record database (path resolved in storage module)
RECORDS_FILENAME = "students.db"
# an unreadable record file is renamed with this suffix before starting fresh
UNREADABLE_SUFFIX = ".unreadable"
APP_DIR_NAME = "Student Roster"
DATA_DIR_ENV = "ROSTER_DATA_DIR"

LOG_LEVEL_ENV = "ROSTER_LOG_LEVEL"
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# maximum number of log lines kept in the Logs panel (oldest trimmed)
LOG_MAX_LINES = 1000

NOTIFY_TIMEOUT_SEC = 5
