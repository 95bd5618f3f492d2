# Overview: Flask CLI command groups for bootstrap, inspection, and maintenance.

# backend/stockbook/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create any missing tables (idempotent).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Profiles:
# - python -m flask users list
#   List all profiles with role and boss.
# - python -m flask users create-boss --email owner@shop.test --password "Password123!"
#   Create a boss profile without going through the API.
#
# Inventory maintenance:
# - python -m flask inventory resequence --sub-category-id 3
# - python -m flask inventory resequence --all
#   Repair item numbering to 1..N (safe to re-run).
#
# Maintenance:
# - python -m flask sessions cleanup
#   Delete expired/revoked sessions older than 30 days.

import click
from flask.cli import with_appcontext

from .extensions import db
from .models import Profile, SubCategory
from .services import auth_service, inventory_service, session_service
from .validation import ValidationError, ConflictError


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("PASS Database tables created")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Confirm destructive reset')
@with_appcontext
def reset_db(yes):
    """Drop and recreate every table. DEV/TEST only."""
    if not yes:
        click.echo("FAIL Refusing to reset without --yes")
        raise SystemExit(1)
    db.drop_all()
    db.create_all()
    click.echo("PASS Database reset")


@click.group('users')
def users_group():
    """Profile inspection and bootstrap."""


@users_group.command('list')
@with_appcontext
def list_users():
    profiles = db.session.query(Profile).order_by(Profile.id.asc()).all()
    if not profiles:
        click.echo("No profiles found")
        return
    for profile in profiles:
        boss = f" boss={profile.boss_id}" if profile.boss_id else ""
        click.echo(f"{profile.id:>4}  {profile.email:<40} {profile.role}{boss}")


@users_group.command('create-boss')
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@with_appcontext
def create_boss(email, password):
    """
    Create a boss profile.

    Fails if the e-mail has a pending invite (it would become a worker).
    """
    try:
        normalized = auth_service.normalize_email(email)
        if auth_service.find_pending_invite(normalized):
            click.echo(f"FAIL {normalized} has a pending worker invite")
            raise SystemExit(1)
        profile = auth_service.sign_up(normalized, password)
    except (ValidationError, ConflictError) as e:
        click.echo(f"FAIL {e}")
        raise SystemExit(1)
    click.echo(f"PASS Created boss {profile.email} (ID: {profile.id})")


@click.group('inventory')
def inventory_group():
    """Inventory maintenance."""


@inventory_group.command('resequence')
@click.option('--sub-category-id', type=int, default=None)
@click.option('--all', 'all_subs', is_flag=True, help='Resequence every sub-category')
@with_appcontext
def resequence(sub_category_id, all_subs):
    """Renumber items 1..N within sub-categories."""
    if all_subs:
        ids = [row.id for row in db.session.query(SubCategory.id).order_by(SubCategory.id).all()]
    elif sub_category_id is not None:
        if db.session.get(SubCategory, sub_category_id) is None:
            click.echo(f"FAIL Sub-category {sub_category_id} not found")
            raise SystemExit(1)
        ids = [sub_category_id]
    else:
        click.echo("FAIL Pass --sub-category-id or --all")
        raise SystemExit(1)

    total = 0
    for sid in ids:
        changed = inventory_service.resequence_sub_category(sid)
        total += changed
        if changed:
            click.echo(f"FIXED sub-category {sid}: {changed} items renumbered")
    click.echo(f"PASS Checked {len(ids)} sub-categories, {total} items renumbered")


@click.group('sessions')
def sessions_group():
    """Session maintenance."""


@sessions_group.command('cleanup')
@with_appcontext
def cleanup_sessions():
    deleted = session_service.cleanup_expired_sessions()
    click.echo(f"PASS Deleted {deleted} expired sessions")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(users_group)
    app.cli.add_command(inventory_group)
    app.cli.add_command(sessions_group)
