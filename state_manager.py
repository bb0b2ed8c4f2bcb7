# --- FILE: state_manager.py ---
import logging
from datetime import datetime
from typing import Literal

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class LogEntry(BaseModel):
    type: Literal["info", "error", "warn", "success"]
    message: str
    timestamp: str


class AppState:
    def __init__(self):
        # Core identifiers
        self.active_file_id = None
        self.selected_folder_id = None
        self.selected_element_id = None

        # Processing / Status
        self.is_processing = False
        self.status_msg = "SYSTEM READY"

        # Console
        self.logs = []
        self.console_open = False

        # AI chat transcript: (role, text)
        self.chat_messages = []

    def add_log(self, message, level="info"):
        entry = LogEntry(type=level, message=message, timestamp=datetime.now().strftime("%H:%M:%S"))
        self.logs.append(entry)
        self.status_msg = message
        if level == "error":
            self.console_open = True
        logger.log(_LEVELS[level], message)
        return entry

    def clear_logs(self):
        self.logs = []
