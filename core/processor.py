import os

from settings import EditorDefaults


def export_name(file_name, ext=EditorDefaults.EXPORT_EXTENSION):
    """Keeps the name when it already carries the extension, else swaps it in."""
    if file_name.endswith("." + ext):
        return file_name
    return file_name.split(".")[0] + "." + ext


def export_script(code, file_name, directory, ext=EditorDefaults.EXPORT_EXTENSION):
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, export_name(file_name, ext))
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(code)
    return path
