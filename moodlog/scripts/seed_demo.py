"""Seed a demo user with a few annotated entries.

Usage:
    flask --app moodlog.wsgi seed-demo --email demo@example.com --password demo12345
"""

from __future__ import annotations

from datetime import timedelta

import click
from flask.cli import with_appcontext

from moodlog.core.ai.client import current_model_client
from moodlog.core.auth.password import hash_password
from moodlog.core.users.models import User
from moodlog.core.utils.timeutils import utcnow
from moodlog.domains.journal.services import journal_service
from moodlog.extensions import db

DEMO_ENTRIES = (
    "I had a great day with friends at the park.",
    "Tired after a long week, work was stressful.",
    "Quiet evening reading a book.",
    "So excited about the trip next month, I love planning it!",
    "Felt sad and a bit angry after the argument.",
)


def seed_demo_user(email: str, password: str, name: str) -> User:
    user = User.query.filter_by(email=email.lower()).first()
    if not user:
        user = User(email=email.lower(), name=name, password_hash=hash_password(password))
        db.session.add(user)
        db.session.commit()
    return user


@click.command("seed-demo")
@click.option("--email", default="demo@example.com", help="Demo account email")
@click.option("--password", default="demo12345", help="Demo account password")
@click.option("--name", default="Demo", help="Demo display name")
@with_appcontext
def seed_demo_command(email: str, password: str, name: str) -> None:
    """Create the demo user and ingest sample entries through the annotation pipeline."""
    user = seed_demo_user(email, password, name)
    client = current_model_client()
    now = utcnow()
    for days_ago, text in enumerate(DEMO_ENTRIES):
        entry = journal_service.ingest_entry(user.id, text, client)
        journal_service.update_entry(entry.id, user.id, {"created_at": now - timedelta(days=days_ago)})
        click.echo(f"  {entry.id} mood={entry.mood_score} tags={entry.tags}")
    click.echo(f"Seeded {len(DEMO_ENTRIES)} entries for {user.email}")


def register_commands(app):
    """Register CLI commands with the Flask app."""
    app.cli.add_command(seed_demo_command)
