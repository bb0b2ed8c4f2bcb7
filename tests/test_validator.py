from core.models import ButtonElement, DropdownElement, Folder, ToggleElement, Window
from core.validator import analyze_window

from conftest import make_window


def test_clean_window_passes():
    window = make_window(elements=[
        ButtonElement(id="b", text="Go", custom_logic="print(math.max(1, 2))"),
        ToggleElement(id="t", text="Fly", flag="fly"),
    ])
    report = analyze_window(window)
    assert report.passed
    assert report.issues == []


def test_duplicate_flags_across_folders():
    window = Window(title="T", folders=(
        Folder(id="a", text="A", elements=(ToggleElement(id="t1", text="One", flag="dup"),)),
        Folder(id="b", text="B", elements=(DropdownElement(id="d1", text="Two", flag="dup"),)),
    ))
    report = analyze_window(window)
    assert not report.passed
    assert [i.element_id for i in report.issues] == ["d1"]
    assert '"dup"' in report.issues[0].message


def test_blank_text_and_unbalanced_parentheses():
    window = make_window(folder_text="Main", elements=[
        ButtonElement(id="b1", text="  "),
        ButtonElement(id="b2", text="Broken", custom_logic="print((1)"),
    ])
    messages = [i.message for i in analyze_window(window).issues]
    assert messages == [
        'Element inside "Main" has no display text.',
        'Mismatched parentheses in "Broken" logic.',
    ]
