import pytest

from core.models import ButtonElement, EditorFile, Folder, Window


def make_window(title="T", elements=(), folder_id="f1", folder_text="Tab"):
    return Window(title=title, folders=(Folder(id=folder_id, text=folder_text, elements=tuple(elements)),))


def make_snapshot(title="T", file_id="1", name="script.lua"):
    return (EditorFile(id=file_id, name=name, data=make_window(title)),)


@pytest.fixture
def scenario_window():
    return make_window(elements=[ButtonElement(id="e1", text="Go", custom_logic="print(1)")])
