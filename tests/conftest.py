"""
Pytest fixtures for the sweetshop API.

Every test gets a fresh in-memory database, a test client, users with each
role and bearer headers for them.
"""
from decimal import Decimal

import pytest
from flask_jwt_extended import create_access_token

from sweetshop import create_app
from sweetshop.extensions import db
from sweetshop.model import User, Sweet

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"
PASSWORD = "Password123!"


@pytest.fixture()
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "JWT_SECRET_KEY": TEST_SECRET,
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def make_user(email, full_name="Test User", is_admin=False, is_super_admin=False):
    user = User.create(
        email=email,
        password=PASSWORD,
        full_name=full_name,
        is_admin=is_admin,
        is_super_admin=is_super_admin,
    )
    db.session.add(user)
    db.session.commit()
    return user


def make_sweet(name="Test Sweet", category="Test", price="5.99", quantity=100):
    sweet = Sweet(name=name, category=category, price=Decimal(price), quantity=quantity,
                  description="", image_url="")
    db.session.add(sweet)
    db.session.commit()
    return sweet


def auth_headers(user) -> dict:
    token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}


def payload(resp) -> dict:
    return resp.get_json()["data"]


@pytest.fixture()
def user(app):
    return make_user("user@example.com")


@pytest.fixture()
def other_user(app):
    return make_user("other@example.com", full_name="Other User")


@pytest.fixture()
def admin(app):
    return make_user("admin@example.com", full_name="Admin User", is_admin=True)


@pytest.fixture()
def super_admin(app):
    return make_user("root@example.com", full_name="Root User", is_super_admin=True)


@pytest.fixture()
def user_headers(user):
    return auth_headers(user)


@pytest.fixture()
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture()
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture()
def super_headers(super_admin):
    return auth_headers(super_admin)


@pytest.fixture()
def sweet(app):
    return make_sweet()
