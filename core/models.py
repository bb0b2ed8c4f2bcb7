# --- FILE: core/models.py ---
import uuid
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from settings import EditorDefaults


class TreeModel(BaseModel):
    """Base for every widget-tree value: immutable, finite numbers, UTF-8 text."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    @field_validator("*")
    @classmethod
    def reject_unencodable_text(cls, v):
        texts = (v,) if isinstance(v, str) else v if isinstance(v, tuple) else ()
        for text in texts:
            if isinstance(text, str):
                try:
                    text.encode("utf-8")
                except UnicodeEncodeError:
                    raise ValueError("text is not valid UTF-8 (lone surrogate)") from None
        return v


class ButtonElement(TreeModel):
    type: Literal["Button"] = "Button"
    id: str
    text: str = ""
    custom_logic: Optional[str] = Field(default=None, alias="customLogic")


class ToggleElement(TreeModel):
    type: Literal["Toggle"] = "Toggle"
    id: str
    text: str = ""
    custom_logic: Optional[str] = Field(default=None, alias="customLogic")
    flag: str
    default_state: bool = Field(default=False, alias="defaultState")


class SliderElement(TreeModel):
    type: Literal["Slider"] = "Slider"
    id: str
    text: str = ""
    custom_logic: Optional[str] = Field(default=None, alias="customLogic")
    flag: str
    min: float = 0
    max: float = 100
    value: float = 50
    decimals: int = Field(default=0, ge=0)


class DropdownElement(TreeModel):
    type: Literal["Dropdown"] = "Dropdown"
    id: str
    text: str = ""
    custom_logic: Optional[str] = Field(default=None, alias="customLogic")
    flag: str
    values: Tuple[str, ...] = ()


Element = Annotated[
    Union[ButtonElement, ToggleElement, SliderElement, DropdownElement],
    Field(discriminator="type"),
]


class Folder(TreeModel):
    id: str
    text: str = ""
    elements: Tuple[Element, ...] = ()


class Window(TreeModel):
    title: str = ""
    folders: Tuple[Folder, ...] = ()


class EditorFile(TreeModel):
    id: str
    name: str
    data: Window
    language: Literal["lua"] = "lua"


# A whole open-tabs state. Tuples keep pushed snapshots immutable.
Snapshot = Tuple[EditorFile, ...]

ELEMENT_TYPES = {
    "Button": ButtonElement,
    "Toggle": ToggleElement,
    "Slider": SliderElement,
    "Dropdown": DropdownElement,
}


def new_id() -> str:
    return uuid.uuid4().hex[:9]


def default_window(title: str = EditorDefaults.WINDOW_TITLE) -> Window:
    return Window(
        title=title,
        folders=(Folder(id=new_id(), text=EditorDefaults.FOLDER_TEXT),),
    )


def default_file(name: str = EditorDefaults.FILE_NAME, file_id: Optional[str] = None,
                 title: str = EditorDefaults.WINDOW_TITLE) -> EditorFile:
    return EditorFile(id=file_id or new_id(), name=name, data=default_window(title))


def new_element(kind: str):
    """Builds an element of the given variant with the builder's defaults."""
    if kind not in ELEMENT_TYPES:
        raise ValueError(f"Unknown element type: {kind}")
    element_id = new_id()
    fields = dict(EditorDefaults.ELEMENT_DEFAULTS[kind])
    if kind != "Button":
        fields["flag"] = f"{kind.lower()}_{element_id}"
    return ELEMENT_TYPES[kind](id=element_id, **fields)


def element_flag(element) -> Optional[str]:
    return getattr(element, "flag", None)
