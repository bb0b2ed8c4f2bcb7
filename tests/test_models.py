import pytest
from pydantic import ValidationError

from core.models import (ButtonElement, DropdownElement, SliderElement, ToggleElement, Window,
                         default_file, new_element)


def test_window_parses_tagged_elements_from_json_keys():
    window = Window.model_validate({
        "title": "Hub",
        "folders": [{
            "id": "f1",
            "text": "Main",
            "elements": [
                {"type": "Button", "id": "b", "text": "Go", "customLogic": "print(1)"},
                {"type": "Toggle", "id": "t", "text": "Fly", "flag": "fly", "defaultState": True},
                {"type": "Slider", "id": "s", "text": "Speed", "flag": "speed",
                 "min": 0, "max": 200, "value": 16, "decimals": 0},
                {"type": "Dropdown", "id": "d", "text": "Team", "flag": "team", "values": ["Red", "Blue"]},
            ],
        }],
    })
    elements = window.folders[0].elements
    assert [type(e) for e in elements] == [ButtonElement, ToggleElement, SliderElement, DropdownElement]
    assert elements[0].custom_logic == "print(1)"
    assert elements[1].default_state is True
    assert elements[3].values == ("Red", "Blue")


def test_dump_uses_camel_case_aliases():
    el = ToggleElement(id="t", text="Fly", flag="fly", custom_logic="x()")
    dumped = el.model_dump(by_alias=True)
    assert dumped["customLogic"] == "x()"
    assert dumped["defaultState"] is False


def test_non_finite_numbers_are_rejected():
    with pytest.raises(ValidationError):
        SliderElement(id="s", text="Speed", flag="speed", value=float("inf"))
    with pytest.raises(ValidationError):
        SliderElement(id="s", text="Speed", flag="speed", min=float("nan"))


def test_negative_decimals_rejected():
    with pytest.raises(ValidationError):
        SliderElement(id="s", text="Speed", flag="speed", decimals=-1)


def test_tree_values_are_frozen():
    window = Window(title="T")
    with pytest.raises(ValidationError):
        window.title = "changed"


def test_unknown_element_type_rejected():
    with pytest.raises(ValidationError):
        Window.model_validate({"title": "T", "folders": [
            {"id": "f", "text": "x", "elements": [{"type": "Label", "id": "l", "text": "hi"}]}]})


def test_new_element_defaults():
    slider = new_element("Slider")
    assert (slider.min, slider.max, slider.value, slider.decimals) == (0, 100, 50, 0)
    assert slider.flag.startswith("slider_")
    dropdown = new_element("Dropdown")
    assert dropdown.values == ("Option 1", "Option 2")
    toggle = new_element("Toggle")
    assert toggle.default_state is False
    assert new_element("Button").text == "Button"


def test_new_element_flags_are_unique():
    assert new_element("Toggle").flag != new_element("Toggle").flag


def test_new_element_unknown_kind():
    with pytest.raises(ValueError):
        new_element("Label")


def test_default_file_has_one_folder():
    file = default_file()
    assert file.name == "script.lua"
    assert len(file.data.folders) == 1
    assert file.data.folders[0].text == "Main Tab"


def test_lone_surrogates_rejected_everywhere():
    with pytest.raises(ValidationError):
        ButtonElement(id="b", text="a\ud800b")
    with pytest.raises(ValidationError):
        DropdownElement(id="d", text="Team", flag="team", values=("ok", "\udc00"))
    with pytest.raises(ValidationError):
        Window(title="\ud83d")
    assert Window(title="emoji \U0001f600").title.endswith("\U0001f600")
