#!/usr/bin/env python3
"""
Command-line interface for todostore.
"""
import json
import sys
from typing import Any, List, NoReturn, Optional

import click

from todostore.config import configure_logging, get_settings
from todostore.exceptions import ConfigurationError, ServiceError, StorageError
from todostore.models import Todo
from todostore.services import TodoService
from todostore.storage import EngineFactory, build_engine

SHELL_HELP = """Options:
  add               - Add a new todo
  get <id>          - Get todo by id
  list              - List all todos
  update <id>       - Update a todo
  delete <id>       - Delete a todo
  exit              - Exit program"""


def get_service(ctx: click.Context) -> TodoService:
    """Build the engine and service on first use and cache them on the context."""
    obj = ctx.find_root().obj
    if obj.get('service') is None:
        try:
            engine = build_engine(obj['backend'], get_settings())
        except (ConfigurationError, StorageError) as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)
        ctx.find_root().call_on_close(engine.close)
        obj['service'] = TodoService(engine)
    return obj['service']


def format_todo(todo: Todo) -> str:
    """Format todo for display."""
    lines = [
        f"Todo #{todo.id}: {todo.title}",
        f"  Completed: {'yes' if todo.completed else 'no'}",
    ]
    if todo.description:
        lines.append(f"  Description: {todo.description}")
    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as JSON."""
    return json.dumps(data, indent=2, default=str)


def fail(error: ServiceError) -> NoReturn:
    """Report a service error on stderr and exit with status 1."""
    click.echo(f"Error: {error.message}", err=True)
    sys.exit(1)


@click.group()
@click.option('--backend', envvar='STORAGE_BACKEND', default=None,
              type=click.Choice(EngineFactory.supported_tags(), case_sensitive=False),
              help='Storage backend (default: STORAGE_BACKEND or sqlite)')
@click.option('--log-level', default=None, help='Log level (default: LOG_LEVEL or INFO)')
@click.pass_context
def cli(ctx, backend, log_level):
    """todostore CLI tool for managing todos."""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    ctx.obj['backend'] = backend or get_settings().storage_backend
    ctx.obj.setdefault('service', None)


@cli.command()
@click.option('--title', required=True, help='Todo title')
@click.option('--description', default='', help='Todo description')
@click.option('--completed', is_flag=True, default=False, help='Mark as already completed')
@click.pass_context
def add(ctx, title, description, completed):
    """Add a new todo."""
    service = get_service(ctx)
    try:
        todo = service.add_todo(Todo(title=title, description=description, completed=completed))
    except ServiceError as e:
        fail(e)
    click.echo(f"Created todo with ID: {todo.id}")


@cli.command()
@click.argument('todo_id')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def get(ctx, todo_id, output_format):
    """Get a todo by ID."""
    service = get_service(ctx)
    try:
        todo = service.get_todo(todo_id)
    except ServiceError as e:
        fail(e)
    if todo is None:
        click.echo(f"Todo {todo_id} not found.", err=True)
        sys.exit(1)
    if output_format == 'json':
        click.echo(format_json(todo.to_dict()))
    else:
        click.echo(format_todo(todo))


@cli.command(name='list')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']),
              default='table', help='Output format')
@click.pass_context
def list_todos(ctx, output_format):
    """List all todos."""
    service = get_service(ctx)
    try:
        todos = service.list_todos()
    except ServiceError as e:
        fail(e)

    if output_format == 'json':
        click.echo(format_json([todo.to_dict() for todo in todos]))
        return
    if not todos:
        click.echo("No todos found.")
        return
    for todo in todos:
        click.echo(format_todo(todo))
        click.echo()


@cli.command()
@click.argument('todo_id')
@click.option('--title', default=None, help='New title')
@click.option('--description', default=None, help='New description')
@click.option('--completed/--not-completed', default=None, help='Completion state')
@click.pass_context
def update(ctx, todo_id, title, description, completed):
    """Update a todo. Options left out keep their current value."""
    service = get_service(ctx)
    try:
        todo = service.edit_todo(todo_id, title=title, description=description, completed=completed)
    except ServiceError as e:
        fail(e)
    click.echo(f"Updated todo {todo.id}")


@cli.command()
@click.argument('todo_id')
@click.pass_context
def delete(ctx, todo_id):
    """Delete a todo."""
    service = get_service(ctx)
    try:
        service.delete_todo(todo_id)
    except ServiceError as e:
        fail(e)
    click.echo(f"Deleted todo {todo_id}")


@cli.command()
@click.pass_context
def shell(ctx):
    """Interactive loop; errors are reported and the loop keeps going."""
    service = get_service(ctx)
    click.echo(f"Started todo shell using storage: {ctx.obj['backend']}")

    while True:
        click.echo()
        click.echo(SHELL_HELP)
        try:
            line = click.prompt(">", default="", show_default=False, prompt_suffix=" ")
        except click.Abort:
            break
        parts = line.strip().split(None, 1)
        if not parts:
            click.echo("Empty input.")
            continue
        command = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if command == "exit":
            break
        try:
            _run_shell_command(service, command, arg)
        except ServiceError as e:
            click.echo(f"Error: {e.message}", err=True)

    click.echo("Shutting down.")


def _run_shell_command(service: TodoService, command: str, arg: str) -> None:
    if command == "add":
        title = click.prompt("Title")
        description = click.prompt("Description", default="", show_default=False)
        todo = service.add_todo(Todo(title=title, description=description))
        click.echo(f"Created todo with ID: {todo.id}")
    elif command == "list":
        todos: List[Todo] = service.list_todos()
        if not todos:
            click.echo("No todos found.")
        for todo in todos:
            click.echo(str(todo))
    elif command in ("get", "update", "delete"):
        if not arg:
            click.echo(f"Please provide id: {command} <id>")
            return
        if command == "get":
            todo = service.get_todo(arg)
            click.echo(str(todo) if todo else f"Todo {arg} not found.")
        elif command == "delete":
            service.delete_todo(arg)
            click.echo(f"Deleted todo {arg}")
        else:
            _update_interactive(service, arg)
    else:
        click.echo(f"Invalid command: {command}")


def _update_interactive(service: TodoService, todo_id: str) -> None:
    current = service.get_todo(todo_id)
    if current is None:
        click.echo(f"Todo {todo_id} not found.")
        return

    click.echo(f"Current title: {current.title}")
    title: Optional[str] = click.prompt("New title (blank to keep)", default="", show_default=False)
    click.echo(f"Current description: {current.description}")
    description: Optional[str] = click.prompt("New description (blank to keep)", default="", show_default=False)
    click.echo(f"Current completed: {current.completed}")
    completed = click.confirm("Mark completed?", default=current.completed)

    service.edit_todo(
        todo_id,
        title=title or None,
        description=description or None,
        completed=completed,
    )
    click.echo(f"Updated todo {todo_id}")


if __name__ == '__main__':
    cli()
