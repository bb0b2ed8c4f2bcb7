class EditorDefaults:
    # Document defaults
    WINDOW_TITLE = "Tora GUI"
    NEW_WINDOW_TITLE = "New Script"
    FOLDER_TEXT = "Main Tab"
    NEW_FOLDER_TEXT = "New Tab"
    FILE_NAME = "script.lua"
    NEW_FILE_NAME = "untitled.lua"
    LANGUAGE = "lua"

    # History
    HISTORY_CAPACITY = 50
    SAVED_SCRIPTS_LIMIT = 10

    # Generated script
    BUILDER_NAME = "Tora GUI Builder"
    LIBRARY_URL = "https://raw.githubusercontent.com/liebertsx/Tora-Library/main/src/librarynew"
    EXPORT_EXTENSION = "lua"

    # Element defaults, keyed by variant
    ELEMENT_DEFAULTS = {
        "Button": {"text": "Button"},
        "Toggle": {"text": "Toggle", "default_state": False},
        "Slider": {"text": "Slider", "min": 0, "max": 100, "value": 50, "decimals": 0},
        "Dropdown": {"text": "Dropdown", "values": ("Option 1", "Option 2")},
    }
