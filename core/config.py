# --- FILE: core/config.py ---
import copy
import json
import os

from settings import EditorDefaults


class ConfigManager:
    def __init__(self, config_path="config.json"):
        self.config_path = config_path
        self.defaults = {
            "history_capacity": EditorDefaults.HISTORY_CAPACITY,
            "export_extension": EditorDefaults.EXPORT_EXTENSION,
            "saved_scripts_limit": EditorDefaults.SAVED_SCRIPTS_LIMIT,
            "ai_deployment": "gpt-5-mini",
            "hotkeys": {
                "undo": "ctrl+z",
                "redo": "ctrl+y",
                "save": "ctrl+s",
                "run": "f5",
            }
        }
        self.data = self.load_config()

    def load_config(self):
        if not os.path.exists(self.config_path):
            return copy.deepcopy(self.defaults)
        try:
            with open(self.config_path, "r") as f:
                return {**self.defaults, **json.load(f)}
        except (OSError, json.JSONDecodeError):
            return copy.deepcopy(self.defaults)

    def save_config(self):
        with open(self.config_path, "w") as f:
            json.dump(self.data, f, indent=4)

    def get(self, key):
        return self.data.get(key, self.defaults.get(key))

    def get_hotkey(self, action_name):
        return self.data["hotkeys"].get(action_name, "")

    def set_value(self, key, value):
        self.data[key] = value
        self.save_config()

# Global Instance
cfg = ConfigManager()
