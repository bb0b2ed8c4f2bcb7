import os

from core.codegen import generate
from core.config import cfg
from core.differ import diff
from core.hashing import window_fingerprint
from core.history import HistoryStack
from core.lineage import lineage, version_pair
from core.models import EditorFile, Folder, default_file, new_element, new_id
from core.processor import export_script
from core.validator import analyze_window
from settings import EditorDefaults
from state_manager import AppState

READ_ONLY_FIELDS = {"id", "type"}


def _patched(model, updates):
    """Validated copy of `model` with `updates` applied (field names or JSON aliases)."""
    names = {}
    for name, info in type(model).model_fields.items():
        names[name] = name
        if info.alias:
            names[info.alias] = name

    data = model.model_dump()
    for key, value in updates.items():
        if key not in names:
            raise ValueError(f"Unknown property: {key}")
        if names[key] in READ_ONLY_FIELDS:
            raise ValueError(f"Property is read-only: {key}")
        data[names[key]] = value
    return type(model).model_validate(data)


class EditorSession:
    """One editing session: open tabs, selection and the history they live in.

    Every successful mutation builds new immutable values and pushes exactly
    one snapshot. Rejected edits are logged to the console and leave the
    history untouched.
    """

    def __init__(self, initial_file=None, capacity=None, state=None):
        first = initial_file or default_file()
        self.history = HistoryStack((first,), capacity or cfg.get("history_capacity"))
        self.state = state or AppState()
        self._code_cache = (None, "")
        self.select_file(first.id)

    # --- Derived state ---

    @property
    def files(self):
        return self.history.current()

    @property
    def active_file(self):
        files = self.files
        return next((f for f in files if f.id == self.state.active_file_id), files[0])

    @property
    def window(self):
        return self.active_file.data

    @property
    def generated_code(self):
        window = self.window
        fingerprint = window_fingerprint(window)
        if self._code_cache[0] != fingerprint:
            self._code_cache = (fingerprint, generate(window))
        return self._code_cache[1]

    def get_file(self, file_id):
        return next((f for f in self.files if f.id == file_id), None)

    def selected(self):
        """Returns ("element" | "folder" | "window", value) for the property panel."""
        window = self.window
        if self.state.selected_element_id:
            for folder in window.folders:
                for el in folder.elements:
                    if el.id == self.state.selected_element_id:
                        return "element", el
        if self.state.selected_folder_id:
            for folder in window.folders:
                if folder.id == self.state.selected_folder_id:
                    return "folder", folder
        return "window", window

    # --- Selection ---

    def select_file(self, file_id):
        file = self.get_file(file_id)
        if file is None:
            self.state.add_log("File not found.", "error")
            return False
        self.state.active_file_id = file.id
        self.state.selected_folder_id = file.data.folders[0].id if file.data.folders else None
        self.state.selected_element_id = None
        return True

    def select_folder(self, folder_id):
        self.state.selected_folder_id = folder_id
        self.state.selected_element_id = None

    def select_element(self, element_id):
        for folder in self.window.folders:
            if any(el.id == element_id for el in folder.elements):
                self.state.selected_folder_id = folder.id
                self.state.selected_element_id = element_id
                return True
        return False

    def clear_selection(self):
        self.state.selected_folder_id = None
        self.state.selected_element_id = None

    # --- Commit helpers ---

    def _commit(self, files):
        return self.history.push(tuple(files))

    def _replace_file(self, file_id, **changes):
        self._commit(f.model_copy(update=changes) if f.id == file_id else f for f in self.files)

    def _update_window(self, window):
        self._replace_file(self.active_file.id, data=window)

    # --- Widget tree mutations ---

    def add_folder(self):
        folder = Folder(id=new_id(), text=EditorDefaults.NEW_FOLDER_TEXT)
        window = self.window
        self._update_window(window.model_copy(update={"folders": window.folders + (folder,)}))
        self.select_folder(folder.id)
        return folder

    def add_element(self, kind):
        window = self.window
        folder_id = self.state.selected_folder_id
        if not any(f.id == folder_id for f in window.folders):
            self.state.add_log("Select a folder first.", "warn")
            return None
        try:
            element = new_element(kind)
        except ValueError as e:
            self.state.add_log(str(e), "error")
            return None

        folders = tuple(
            f.model_copy(update={"elements": f.elements + (element,)}) if f.id == folder_id else f
            for f in window.folders
        )
        self._update_window(window.model_copy(update={"folders": folders}))
        self.state.selected_element_id = element.id
        return element

    def delete_selected(self):
        kind, target = self.selected()
        window = self.window

        if kind == "element":
            folders = tuple(
                f.model_copy(update={"elements": tuple(e for e in f.elements if e.id != target.id)})
                if any(e.id == target.id for e in f.elements) else f
                for f in window.folders
            )
            self._update_window(window.model_copy(update={"folders": folders}))
            self.state.selected_element_id = None
            return True

        if kind == "folder":
            if len(window.folders) <= 1:
                self.state.add_log("Cannot delete the last tab.", "warn")
                return False
            folders = tuple(f for f in window.folders if f.id != target.id)
            self._update_window(window.model_copy(update={"folders": folders}))
            self.select_folder(folders[0].id)
            return True

        return False

    def update_selected(self, updates):
        """Patches the selected element, folder or window. Invalid patches change nothing."""
        kind, target = self.selected()
        try:
            patched = _patched(target, updates)
        except ValueError as e:
            self.state.add_log(f"Rejected edit on {kind}: {e}", "error")
            return False

        window = self.window
        if kind == "element":
            folders = tuple(
                f.model_copy(update={"elements": tuple(patched if e.id == target.id else e for e in f.elements)})
                for f in window.folders
            )
            window = window.model_copy(update={"folders": folders})
        elif kind == "folder":
            folders = tuple(patched if f.id == target.id else f for f in window.folders)
            window = window.model_copy(update={"folders": folders})
        else:
            window = patched

        self._update_window(window)
        return True

    # --- Files (tabs) ---

    def rename_file(self, file_id, name):
        if not name or not name.strip():
            self.state.add_log("File name cannot be empty.", "warn")
            return False
        file = self.get_file(file_id)
        if file is None:
            self.state.add_log("File not found for renaming", "error")
            return False
        try:
            renamed = _patched(file, {"name": name})
        except ValueError as e:
            self.state.add_log(f"Rejected rename: {e}", "error")
            return False
        self._commit(renamed if f.id == file_id else f for f in self.files)
        self.state.add_log(f"Renamed to {renamed.name}", "success")
        return True

    def new_file(self):
        file = default_file(EditorDefaults.NEW_FILE_NAME, title=EditorDefaults.NEW_WINDOW_TITLE)
        self._commit(self.files + (file,))
        self.select_file(file.id)
        self.state.add_log("Opened new tab.", "info")
        return file

    def close_file(self, file_id):
        files = self.files
        if len(files) == 1:
            self.state.add_log("Cannot close the last tab.", "warn")
            return False
        if self.get_file(file_id) is None:
            self.state.add_log("File not found.", "error")
            return False

        remaining = tuple(f for f in files if f.id != file_id)
        self._commit(remaining)
        if self.state.active_file_id == file_id:
            self.select_file(remaining[-1].id)
        return True

    def open_window(self, window, name=None):
        """Loads a saved window into a new tab."""
        file = EditorFile(id=new_id(), name=name or f"{window.title}.{EditorDefaults.LANGUAGE}", data=window)
        self._commit(self.files + (file,))
        self.select_file(file.id)
        self.state.add_log("Loaded script into new tab.", "info")
        return file

    def apply_window(self, file_id, window):
        """Replaces a file's window; AI proposals take this same path."""
        if self.get_file(file_id) is None:
            self.state.add_log("File not found.", "error")
            return False
        self._replace_file(file_id, data=window)
        return True

    # --- Undo / Redo ---

    def undo(self):
        snapshot = self.history.undo()
        if snapshot is not None:
            self.state.add_log("Undo successful", "info")
        return snapshot

    def redo(self):
        snapshot = self.history.redo()
        if snapshot is not None:
            self.state.add_log("Redo successful", "info")
        return snapshot

    # --- Version history ---

    def file_history(self, file_id):
        return lineage(self.history, file_id)

    def version_diff(self, file_id, index=0):
        """Diff of one version's generated code against the version before it."""
        records = self.file_history(file_id)
        if not 0 <= index < len(records):
            self.state.add_log("Version not found.", "error")
            return []
        selected, previous = version_pair(records, index)
        return diff(generate(previous.file.data), generate(selected.file.data))

    def restore_version(self, file_id, index):
        records = self.file_history(file_id)
        if not 0 <= index < len(records):
            self.state.add_log("Version not found.", "error")
            return False

        restored = records[index].file
        files = self.files
        if any(f.id == file_id for f in files):
            files = tuple(restored if f.id == file_id else f for f in files)
        else:
            files = files + (restored,)
        self._commit(files)
        self.state.add_log(f"Restored version of {restored.name}", "success")
        return True

    # --- Analysis / Export ---

    def run_analysis(self):
        file = self.active_file
        self.state.add_log(f"Running analysis for {file.name}...", "info")
        report = analyze_window(file.data)
        for issue in report.issues:
            self.state.add_log(issue.message, "warn")
        if report.passed:
            self.state.add_log("Syntax Check Passed: Script looks good!", "success")
        else:
            self.state.add_log(f"Analysis completed with {len(report.issues)} warnings.", "warn")
        return report

    def export(self, directory, ext=None):
        path = export_script(self.generated_code, self.active_file.name, directory,
                             ext or cfg.get("export_extension"))
        self.state.add_log(f"Downloaded {os.path.basename(path)}", "success")
        return path
