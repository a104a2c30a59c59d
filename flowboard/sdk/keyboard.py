"""Keyboard shortcuts for graph editing.

Delete/Backspace (without Ctrl/Cmd) deletes the selection, Ctrl/Cmd+Z undoes
and Ctrl/Cmd+Shift+Z redoes. Keys typed into a text-entry control are left
alone.
"""

from pydantic import BaseModel, Field

from flowboard.sdk.canvas import Canvas

TEXT_ENTRY_TAGS = {"INPUT", "TEXTAREA"}


class KeyEvent(BaseModel):
    """The parts of a browser keydown event the shortcuts look at."""

    model_config = {"populate_by_name": True}

    key: str
    ctrl_key: bool = Field(default=False, alias="ctrlKey")
    meta_key: bool = Field(default=False, alias="metaKey")
    shift_key: bool = Field(default=False, alias="shiftKey")
    target_tag: str = Field(default="", alias="tagName")
    is_content_editable: bool = Field(default=False, alias="isContentEditable")
    platform: str = ""

    @property
    def in_text_entry(self) -> bool:
        return self.target_tag.upper() in TEXT_ENTRY_TAGS or self.is_content_editable

    @property
    def command(self) -> bool:
        """Cmd on macs, Ctrl everywhere else."""
        if "MAC" in self.platform.upper():
            return self.meta_key
        return self.ctrl_key


def handle_key(canvas: Canvas, event: KeyEvent) -> str | None:
    """Apply a shortcut. Returns the action taken, or None if the key was ignored."""
    if event.in_text_entry:
        return None

    if event.key in ("Delete", "Backspace") and not event.command:
        canvas.delete_selected()
        return "delete"
    if event.command and event.key.lower() == "z":
        if event.shift_key:
            canvas.redo()
            return "redo"
        canvas.undo()
        return "undo"
    return None
