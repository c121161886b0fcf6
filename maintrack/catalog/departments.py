from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Optional

from ..common.validation import is_valid_department_name, is_valid_email, is_valid_phone
from ..infra.contracts import LogSink, Prompter
from ..infra.models import Department
from ..reporting import render
from ..stores import Registry


class DepartmentCatalog:
    """Department data entry. Deactivation never touches the department's assets."""

    def __init__(self, registry: Registry, prompter: Prompter, log: LogSink, echo: Callable[[str], Any] = print) -> None:
        self.registry = registry
        self.prompter = prompter
        self.log = log
        self.echo = echo

    def _read_name(self, prompt: str) -> str:
        while True:
            name = self.prompter.read_dynamic_string(prompt)
            if is_valid_department_name(name):
                return name
            self.echo("The department name is too short. Try again.")
            self.log.append("Error: Department name too short (fewer than 3 characters).")

    def _read_phone(self) -> str:
        while True:
            value = self.prompter.read_dynamic_string("Contact (9 digits): ").strip()
            if is_valid_phone(value):
                return value
            self.echo("Error: the contact must have exactly 9 digits.")
            self.log.append("Error: Invalid contact (phone number must have 9 digits).")

    def _read_email(self) -> str:
        while True:
            value = self.prompter.read_dynamic_string("Email to associate with the department: ").strip()
            if is_valid_email(value):
                self.echo("Email associated.")
                return value
            self.echo("Error: invalid email format. Try again.")
            self.log.append("Error: Invalid email format.")

    def _read_contact(self) -> str:
        choice = self.prompter.read_int_in_range(1, 2, "Contact by phone number or email? (1) Phone number (2) Email\n")
        return self._read_phone() if choice == 1 else self._read_email()

    def _pick(self, prompt: str, action: str) -> Department:
        max_id = self.registry.departments.max_id()
        while True:
            did = self.prompter.read_int_in_range(0, max_id, prompt)
            d = self.registry.departments.find(did)
            if d is not None:
                return d
            self.echo("No department has that ID. Try again.")
            self.log.append(f"Warning: Attempt to {action} a department with an unknown ID.")

    def create(self) -> Department:
        self.echo(render.heading("CREATE DEPARTMENT"))
        name = self._read_name("Department name: ")
        responsible = self.prompter.read_validated_name("Name of the department's responsible person: ")
        contact = self._read_contact()

        store = self.registry.departments
        d = Department(department_id=store.next_id(), name=name, responsible=responsible, contact=contact)
        store.add(d)
        store.active_count += 1

        self.echo(f"Department {d.department_id} created.")
        self.log.append("Info: A new department was created.")
        self.prompter.pause()
        return d

    def list(self) -> None:
        for line in render.department_listing(self.registry.departments.records()):
            self.echo(line)
        self.prompter.pause()

    def update(self) -> Optional[Department]:
        self.echo(render.heading("UPDATE DEPARTMENT"))
        if self.registry.departments.active_count == 0:
            self.echo("There are no active departments.")
            self.prompter.pause()
            return None

        d = self._pick("ID of the department to edit: ", "update")
        field = self.prompter.read_int_in_range(
            1, 3, "Field to edit:\n1 - Department name\n2 - Responsible person\n3 - Contact\n"
        )
        if field == 1:
            d = replace(d, name=self._read_name("New department name: "))
        elif field == 2:
            d = replace(d, responsible=self.prompter.read_validated_name("New responsible person: "))
        else:
            d = replace(d, contact=self._read_contact())

        self.registry.departments.replace(d)
        self.echo("Department updated.")
        self.log.append("Info: A department was updated.")
        self.prompter.pause()
        return d

    def deactivate(self) -> Optional[Department]:
        self.echo(render.heading("DEACTIVATE DEPARTMENT"))
        store = self.registry.departments
        if len(store) == 0:
            self.echo("There are no registered departments.")
            self.log.append("Warning: Attempt to deactivate a department with no departments registered.")
            self.prompter.pause()
            return None
        if store.active_count == 0:
            self.echo("There are no active departments.")
            self.log.append("Warning: Attempt to deactivate a department with no active departments.")
            self.prompter.pause()
            return None

        d = self._pick("ID of the department to deactivate: ", "deactivate")
        if d.state == "inactive":
            self.echo("The selected department is already inactive.")
            self.log.append("Warning: Attempt to deactivate a department that is already inactive.")
            self.prompter.pause()
            return None

        d = store.replace(replace(d, state="inactive"))
        if store.active_count > 0:
            store.active_count -= 1

        self.echo("The department was deactivated.")
        self.log.append("Info: A department was deactivated.")
        self.prompter.pause()
        return d
