"""
Presentation surface used by the UI binder.
"""

import getpass
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from timesheet_vault.models.record import Shift


class StatusClass:
    """Visual class of the status region."""

    NEUTRAL = ""
    SUCCESS = "success"
    ERROR = "error"


@runtime_checkable
class TimesheetView(Protocol):
    """Passive read/write surface: four inputs, three buttons, one status line."""

    def read_name(self) -> str: ...

    def read_shift(self) -> str: ...

    def read_hours(self) -> str: ...

    def read_password(self) -> str: ...

    def clear_name(self) -> None: ...

    def clear_hours(self) -> None: ...

    def set_status(self, text: str, css_class: str = StatusClass.NEUTRAL) -> None: ...

    def set_authorize_visible(self, visible: bool) -> None: ...

    def set_instructions_visible(self, visible: bool) -> None: ...

    def set_sign_out_visible(self, visible: bool) -> None: ...

    def set_form_visible(self, visible: bool) -> None: ...


class ConsoleView:
    """Terminal rendition of the timesheet form."""

    def __init__(
        self,
        *,
        prompt: Callable[[str], str] = input,
        secret_prompt: Callable[[str], str] = getpass.getpass,
        output: Callable[[str], None] = print,
    ) -> None:
        self._prompt = prompt
        self._secret_prompt = secret_prompt
        self._output = output

        self.name = ""
        self.shift = Shift.MORNING.value
        self.hours = ""
        self.password = ""

        self.status = ""
        self.status_class = StatusClass.NEUTRAL
        self.authorize_visible = False
        self.instructions_visible = False
        self.sign_out_visible = False
        self.form_visible = False

    def read_name(self) -> str:
        return self.name

    def read_shift(self) -> str:
        return self.shift

    def read_hours(self) -> str:
        return self.hours

    def read_password(self) -> str:
        return self.password

    def clear_name(self) -> None:
        self.name = ""

    def clear_hours(self) -> None:
        self.hours = ""

    def set_status(self, text: str, css_class: str = StatusClass.NEUTRAL) -> None:
        self.status = text
        self.status_class = css_class
        if text:
            self._output(text)

    def set_authorize_visible(self, visible: bool) -> None:
        self.authorize_visible = visible

    def set_instructions_visible(self, visible: bool) -> None:
        self.instructions_visible = visible
        if visible:
            self._output("Authorize with Google to start saving attendance entries.")

    def set_sign_out_visible(self, visible: bool) -> None:
        self.sign_out_visible = visible

    def set_form_visible(self, visible: bool) -> None:
        self.form_visible = visible

    def fill_form(self) -> None:
        """Prompt for the four form fields. Blank name or hours keeps the current value."""
        self.name = self._prompt(f"Employee name [{self.name}]: ") or self.name
        choices = "/".join(s.value for s in Shift)
        self.shift = self._prompt(f"Shift ({choices}) [{self.shift}]: ") or self.shift
        self.hours = self._prompt(f"Hours worked [{self.hours}]: ") or self.hours
        self.password = self._secret_prompt("Encryption key: ") or self.password

    def choose_action(self) -> str:
        """Ask which visible button to press; returns its name or "quit"."""
        actions = []
        if self.authorize_visible:
            actions.append("authorize")
        if self.form_visible:
            actions.append("save")
        if self.sign_out_visible:
            actions.append("signout")
        actions.append("quit")
        answer = self._prompt(f"Action ({'/'.join(actions)}): ").strip().lower()
        return answer if answer in actions else ""
