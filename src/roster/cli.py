"""CLI entry point for roster.

Every command works against the backend chosen in roster.yaml (json snapshot
or sql database). ``roster menu`` starts the interactive console menu.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import click
from sqlalchemy.exc import SQLAlchemyError

from roster.config import ConfigError, RosterConfig, find_config, load_config
from roster.logging import setup_logging
from roster.repository import open_repository
from roster.service import StudentService
from roster.students import Department, InvalidArgumentError, RepositoryError, Status

if TYPE_CHECKING:
    from collections.abc import Iterator

    from roster.students import Student

logger = logging.getLogger(__name__)

DEPARTMENT_CHOICES = ", ".join(d.code for d in Department)
STATUS_CHOICES = ", ".join(s.code for s in Status)


def _load_config(config_path: Path | None) -> RosterConfig:
    if config_path is None:
        config_path = find_config()
    if config_path is None:
        config = RosterConfig(root_path=Path.cwd())
    else:
        config = load_config(config_path)
    return config.apply_env()


def _service(ctx: click.Context) -> StudentService:
    config = ctx.find_object(RosterConfig)
    repository = ctx.with_resource(open_repository(config))
    return StudentService(repository)


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn domain and storage errors into a message and exit status 1."""
    try:
        yield
    except InvalidArgumentError as e:
        click.echo(f"Invalid input: {e}", err=True)
        sys.exit(1)
    except RepositoryError as e:
        click.echo(f"Storage error: {e}", err=True)
        sys.exit(1)
    except SQLAlchemyError as e:
        logger.exception("Database failure")
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)


def _summary_line(student: Student) -> str:
    return (
        f"{student.id:>5}  {student.name:<25.25}  {student.email:<30.30}  "
        f"{student.department.code:<4}  {student.status.display_name}"
    )


def _echo_table(students: list[Student]) -> None:
    if not students:
        click.echo("No students found.")
        return
    click.echo(f"{'ID':>5}  {'Name':<25}  {'Email':<30}  {'Dept':<4}  Status")
    for student in students:
        click.echo(_summary_line(student))
    click.echo(f"\n{len(students)} student(s)")


def _not_found(student_id: int) -> None:
    click.echo(f"Student {student_id} not found.", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to roster.yaml (auto-detected if not specified)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Roster - manage student records."""
    try:
        config = _load_config(config_path)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(config.logging, root_path=config.root_path, verbose=verbose)
    ctx.obj = config


@main.command()
@click.option("--name", prompt=True, help="Full name")
@click.option("--email", prompt=True, help="Email address")
@click.option("--phone", prompt=True, help="Phone number")
@click.option("--dob", prompt="Date of birth (yyyy-MM-dd)", help="Date of birth, yyyy-MM-dd")
@click.option("--address", prompt=True, default="", show_default=False, help="Postal address")
@click.option("--department", prompt=f"Department ({DEPARTMENT_CHOICES})", help="Department code")
@click.option(
    "--status",
    prompt=f"Status ({STATUS_CHOICES})",
    default=Status.ACTIVE.code,
    help="Status code",
)
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    email: str,
    phone: str,
    dob: str,
    address: str,
    department: str,
    status: str,
) -> None:
    """Add a new student."""
    with _reporting_errors():
        student = _service(ctx).create_student(
            name, email, phone, dob, address or None, department, status
        )
    click.echo(f"Student added with ID {student.id}.")
    click.echo(student.describe())


@main.command()
@click.argument("student_id", type=int)
@click.pass_context
def show(ctx: click.Context, student_id: int) -> None:
    """Show one student."""
    with _reporting_errors():
        student = _service(ctx).find_student(student_id)
    if student is None:
        _not_found(student_id)
    click.echo(student.describe())


@main.command(name="list")
@click.pass_context
def list_students(ctx: click.Context) -> None:
    """List all students."""
    with _reporting_errors():
        students = _service(ctx).list_students()
    _echo_table(students)


@main.command()
@click.argument("student_id", type=int)
@click.option("--name", default=None, help="New full name")
@click.option("--email", default=None, help="New email address")
@click.option("--phone", default=None, help="New phone number")
@click.option("--address", default=None, help="New postal address")
@click.option("--department", default=None, help="New department code")
@click.option("--status", default=None, help="New status code")
@click.pass_context
def update(
    ctx: click.Context,
    student_id: int,
    name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
    department: str | None,
    status: str | None,
) -> None:
    """Change one or more fields of a student."""
    if all(value is None for value in (name, email, phone, address, department, status)):
        raise click.UsageError("Nothing to update; pass at least one field option.")

    with _reporting_errors():
        student = _service(ctx).update_fields(
            student_id,
            name=name,
            email=email,
            phone=phone,
            address=address,
            department_code=department,
            status_code=status,
        )
    if student is None:
        _not_found(student_id)
    click.echo("Student updated.")
    click.echo(student.describe())


@main.command()
@click.argument("student_id", type=int)
@click.confirmation_option(prompt="Delete this student?")
@click.pass_context
def delete(ctx: click.Context, student_id: int) -> None:
    """Delete a student."""
    with _reporting_errors():
        deleted = _service(ctx).delete_student(student_id)
    if not deleted:
        _not_found(student_id)
    click.echo(f"Student {student_id} deleted.")


# --- Interactive menu ---

MENU = """
=== Student Management ===
1. Add a New Student
2. Find a Student by ID
3. Update a Student's Information
4. Delete a Student
5. Display All Students
0. Exit"""

UPDATE_MENU = """
1. Name
2. Email
3. Phone
4. Address
5. Department
6. Status
0. Back"""


def _menu_add(service: StudentService) -> None:
    student = service.create_student(
        click.prompt("Name"),
        click.prompt("Email"),
        click.prompt("Phone"),
        click.prompt("Date of birth (yyyy-MM-dd)"),
        click.prompt("Address", default="", show_default=False) or None,
        click.prompt(f"Department ({DEPARTMENT_CHOICES})"),
        click.prompt(f"Status ({STATUS_CHOICES})", default=Status.ACTIVE.code),
    )
    click.echo(f"Student added with ID {student.id}.")


def _menu_find(service: StudentService) -> None:
    student_id = click.prompt("Student ID", type=int)
    student = service.find_student(student_id)
    click.echo(student.describe() if student else f"Student {student_id} not found.")


def _menu_update(service: StudentService) -> None:
    student_id = click.prompt("Student ID", type=int)
    if service.find_student(student_id) is None:
        click.echo(f"Student {student_id} not found.")
        return
    click.echo(UPDATE_MENU)
    field = click.prompt("Field to update", type=click.IntRange(0, 6))
    if field == 0:
        return
    actions = {
        1: ("New name", service.update_name),
        2: ("New email", service.update_email),
        3: ("New phone", service.update_phone),
        4: ("New address", service.update_address),
        5: (f"New department ({DEPARTMENT_CHOICES})", service.update_department),
        6: (f"New status ({STATUS_CHOICES})", service.update_status),
    }
    label, method = actions[field]
    student = method(student_id, click.prompt(label))
    click.echo("Student updated." if student else f"Student {student_id} not found.")


def _menu_delete(service: StudentService) -> None:
    student_id = click.prompt("Student ID", type=int)
    if service.delete_student(student_id):
        click.echo(f"Student {student_id} deleted.")
    else:
        click.echo(f"Student {student_id} not found.")


@main.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Run the interactive console menu."""
    with _reporting_errors():
        service = _service(ctx)
    handlers = {
        1: _menu_add,
        2: _menu_find,
        3: _menu_update,
        4: _menu_delete,
        5: lambda s: _echo_table(s.list_students()),
    }
    while True:
        click.echo(MENU)
        choice = click.prompt("Enter your choice", type=click.IntRange(0, 5))
        if choice == 0:
            click.echo("Goodbye!")
            return
        try:
            handlers[choice](service)
        except InvalidArgumentError as e:
            click.echo(f"Error: {e}", err=True)
        except (RepositoryError, SQLAlchemyError) as e:
            logger.warning("Menu action %d failed: %s", choice, e)
            click.echo(f"Error: {e}", err=True)


if __name__ == "__main__":
    main()
