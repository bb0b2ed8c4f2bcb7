# --- FILE: database/db_handler.py ---
import sqlite3
import threading
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from core.models import Window, new_id
from settings import EditorDefaults


class SavedScript(BaseModel):
    id: str
    name: str
    timestamp: datetime
    data: Window


class DBHandler:
    """Saved-scripts shelf. Keeps only the newest `limit` entries."""

    def __init__(self, db_path="tora_scripts.db", limit=EditorDefaults.SAVED_SCRIPTS_LIMIT):
        self.db_path = db_path
        self.limit = limit
        self.lock = threading.Lock()
        self.conn = sqlite3.connect(db_path, check_same_thread=False)
        self.create_tables()

    def create_tables(self):
        query = """
        CREATE TABLE IF NOT EXISTS saved_scripts (
            id TEXT PRIMARY KEY,
            name TEXT,
            timestamp DATETIME,
            data_json TEXT
        )
        """
        with self.lock:
            self.conn.execute(query)
            self.conn.commit()

    def save_script(self, name, window: Window) -> SavedScript:
        script = SavedScript(id=new_id(), name=name, timestamp=datetime.now(), data=window)
        with self.lock:
            cursor = self.conn.cursor()
            cursor.execute(
                "INSERT INTO saved_scripts (id, name, timestamp, data_json) VALUES (?, ?, ?, ?)",
                (script.id, script.name, script.timestamp.isoformat(), window.model_dump_json(by_alias=True)),
            )
            # Prune everything but the newest entries
            cursor.execute(
                "DELETE FROM saved_scripts WHERE rowid NOT IN "
                "(SELECT rowid FROM saved_scripts ORDER BY rowid DESC LIMIT ?)",
                (self.limit,),
            )
            self.conn.commit()
        return script

    def list_scripts(self) -> List[SavedScript]:
        with self.lock:
            cursor = self.conn.cursor()
            cursor.execute("SELECT id, name, timestamp, data_json FROM saved_scripts ORDER BY rowid DESC")
            return [self._to_script(row) for row in cursor.fetchall()]

    def get_script(self, script_id) -> Optional[SavedScript]:
        with self.lock:
            cursor = self.conn.cursor()
            cursor.execute("SELECT id, name, timestamp, data_json FROM saved_scripts WHERE id = ?", (script_id,))
            res = cursor.fetchone()
            return self._to_script(res) if res else None

    def delete_script(self, script_id):
        with self.lock:
            cursor = self.conn.cursor()
            cursor.execute("DELETE FROM saved_scripts WHERE id = ?", (script_id,))
            self.conn.commit()
            return cursor.rowcount > 0

    def close(self):
        try:
            with self.lock:
                self.conn.close()
        except sqlite3.Error:
            pass

    @staticmethod
    def _to_script(row):
        return SavedScript(
            id=row[0],
            name=row[1],
            timestamp=datetime.fromisoformat(row[2]),
            data=Window.model_validate_json(row[3]),
        )
