# sweetshop/cli.py
import click
from flask.cli import with_appcontext

from .extensions import db
from .model import User


@click.command("create-admin")
@click.option("--email", required=True)
@click.option("--password", required=True)
@click.option("--name", required=True)
@click.option("--super", "is_super", is_flag=True, help="Make the account a super admin.")
@with_appcontext
def create_admin(email, password, name, is_super):
    email = User.normalize_email(email)
    if User.query.filter_by(email=email).first():
        click.echo("Email already exists"); return
    u = User.create(email=email, password=password, full_name=name, is_admin=True, is_super_admin=is_super)
    db.session.add(u); db.session.commit()
    click.echo(f"Admin created: {u.id} {u.email}")


@click.command("make-admin")
@click.argument("email")
@click.option("--super", "is_super", is_flag=True, help="Make the user a super admin.")
@with_appcontext
def make_admin(email, is_super):
    user = User.query.filter_by(email=User.normalize_email(email)).first()
    if not user:
        raise click.ClickException(f"User with email {email} not found")
    user.is_admin = True
    if is_super:
        user.is_super_admin = True
    db.session.commit()
    role = "a super admin" if is_super else "an admin"
    click.echo(f"User {user.email} is now {role}")


def register_cli(app):
    app.cli.add_command(create_admin)
    app.cli.add_command(make_admin)
