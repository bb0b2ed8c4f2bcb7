"""
Lua code generation for the widget tree.

`generate()` turns a Window into a script for the Tora UI library. It is a
total function: any Window the models accept produces text, and the same
Window always produces byte-identical text (history browsing compares
generator output to decide whether two states differ).
"""
import re

from core.models import ButtonElement, DropdownElement, SliderElement, ToggleElement, Window
from settings import EditorDefaults

INDENT = "    "

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Long brackets open a raw Lua string or comment; re-indenting would alter its contents.
_LONG_BRACKET = re.compile(r"\[=*\[")
_NON_IDENT = re.compile(r"[^A-Za-z0-9_]")


def lua_string(value: str) -> str:
    """Quotes text as a Lua double-quoted string literal."""
    out = []
    for ch in value:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 32 or ord(ch) == 127:
            out.append("\\%03d" % ord(ch))
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def lua_number(value) -> str:
    """Integral values print without a fraction, others use the shortest repr."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def lua_bool(value: bool) -> str:
    return "true" if value else "false"


def folder_variable(folder_id: str) -> str:
    # Derived from the id, not the position, so reordering folders moves blocks only.
    return "tab_" + _NON_IDENT.sub("_", folder_id)


def _body(custom_logic, placeholder):
    if custom_logic is None or not custom_logic.strip():
        return [INDENT * 2 + placeholder]
    if _LONG_BRACKET.search(custom_logic):
        return [custom_logic]
    return [(INDENT * 2 + line) if line else line for line in custom_logic.split("\n")]


def _block(owner, method, fields, callback_arg, custom_logic, placeholder):
    lines = [f"{owner}:{method}({{"]
    for key, rendered in fields:
        lines.append(f"{INDENT}{key} = {rendered},")
    lines.append(f"{INDENT}callback = function({callback_arg})")
    lines.extend(_body(custom_logic, placeholder))
    lines.append(f"{INDENT}end")
    lines.append("})")
    return lines


def _emit_button(owner, el):
    return _block(owner, "AddButton", [("text", lua_string(el.text))], "",
                  el.custom_logic, f"print({lua_string(el.text + ' clicked')})")


def _emit_toggle(owner, el):
    fields = [
        ("text", lua_string(el.text)),
        ("flag", lua_string(el.flag)),
        ("state", lua_bool(el.default_state)),
    ]
    return _block(owner, "AddToggle", fields, "state",
                  el.custom_logic, f"print({lua_string(el.text + ':')}, state)")


def _emit_slider(owner, el):
    fields = [
        ("text", lua_string(el.text)),
        ("flag", lua_string(el.flag)),
        ("min", lua_number(el.min)),
        ("max", lua_number(el.max)),
        ("value", lua_number(el.value)),
        ("decimals", lua_number(el.decimals)),
    ]
    return _block(owner, "AddSlider", fields, "value",
                  el.custom_logic, f"print({lua_string(el.text + ':')}, value)")


def _emit_dropdown(owner, el):
    options = ", ".join(lua_string(v) for v in el.values)
    fields = [
        ("text", lua_string(el.text)),
        ("flag", lua_string(el.flag)),
        ("values", "{" + options + "}"),
    ]
    return _block(owner, "AddDropdown", fields, "option",
                  el.custom_logic, f"print({lua_string(el.text + ':')}, option)")


_EMITTERS = {
    ButtonElement: _emit_button,
    ToggleElement: _emit_toggle,
    SliderElement: _emit_slider,
    DropdownElement: _emit_dropdown,
}


def generate(window: Window, library_url: str = EditorDefaults.LIBRARY_URL) -> str:
    element_count = sum(len(f.elements) for f in window.folders)
    lines = [
        f"-- Generated by {EditorDefaults.BUILDER_NAME}",
        f"-- Window: {lua_string(window.title)}",
        f"-- Folders: {len(window.folders)} | Elements: {element_count}",
        "",
        f"local library = loadstring(game:HttpGet({lua_string(library_url)}, true))()",
        f"local window = library:CreateWindow({lua_string(window.title)})",
    ]

    for folder in window.folders:
        owner = folder_variable(folder.id)
        lines.append("")
        lines.append(f"-- Folder: {lua_string(folder.text)}")
        lines.append(f"local {owner} = window:AddFolder({lua_string(folder.text)})")
        for element in folder.elements:
            lines.append("")
            lines.extend(_EMITTERS[type(element)](owner, element))

    lines.append("")
    lines.append("library:Init()")
    return "\n".join(lines) + "\n"
