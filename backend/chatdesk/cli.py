# Overview: Flask CLI command groups for bootstrap and inspection.

# backend/chatdesk/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap:
# - python -m flask system init-db
#   Create all tables that do not exist yet (use `flask db upgrade` for migrations).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Users:
# - python -m flask users list
#   List all users.
# - python -m flask users create --username alice --password secret1
#   Create a user and print their token.
#
# Requests:
# - python -m flask requests list [--status new]
#   List support requests, newest first.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import User, REQUEST_STATUSES
from .services import auth_service, request_service
from .validation import ServiceError
from .time_utils import to_utc_z


@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create missing tables."""
    db.create_all()
    click.echo("PASS Database tables created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destroying all data')
@with_appcontext
def reset_db(yes):
    """Drop and recreate all tables. DEV/TEST only."""
    if not yes:
        raise click.UsageError("Refusing to reset without --yes")
    db.drop_all()
    db.create_all()
    click.echo("PASS Database reset")


@click.group('users')
def users_group():
    """User inspection and bootstrap commands."""


@users_group.command('list')
@with_appcontext
def list_users():
    """List all users."""
    users = db.session.query(User).order_by(User.id).all()
    if not users:
        click.echo("No users found")
        return
    for user in users:
        click.echo(f"{user.id}\t{user.username}\t{to_utc_z(user.created_at)}")


@users_group.command('create')
@click.option('--username', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_user_command(username, password):
    """Create a user and print their token."""
    try:
        user = auth_service.register(username, password)
    except ServiceError as e:
        raise click.ClickException(e.message)
    click.echo(f"PASS Created user {user.username} (ID: {user.id})")
    click.echo(f"Token: {user.token}")


@click.group('requests')
def requests_group():
    """Support request inspection commands."""


@requests_group.command('list')
@click.option('--status', type=click.Choice(REQUEST_STATUSES), default=None)
@with_appcontext
def list_requests(status):
    """List support requests, newest first."""
    rows = request_service.list_all()
    if status:
        rows = [r for r in rows if r.status == status]
    if not rows:
        click.echo("No requests found")
        return
    for req in rows:
        click.echo(f"{req.id}\t{req.status}\t{req.priority}\t{req.author_username}\t{req.title}")


def register_commands(app):
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(requests_group)
