"""Shared pytest fixtures: an app on an in-memory MongoDB, users and tokens."""

import os

os.environ.setdefault("APP_LOG_TO_FILE", "false")

import mongomock
import pytest

from fletoads import create_app
from fletoads.config import TestingConfig
from fletoads.constants.service_code import ROLES
from fletoads.models.plan_model import Plan
from fletoads.models.user_model import User
from fletoads.security.auth import generate_access_token
from fletoads.utils.plan.plan_catalog import PlanCatalog


@pytest.fixture
def app():
    app = create_app(TestingConfig, mongo_client=mongomock.MongoClient())
    yield app
    app.extensions["mongo"].close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def db(app):
    return app.extensions["mongo"]


@pytest.fixture
def make_user(app):
    """
    Factory: make_user(email=..., role=..., plan_slug=...) -> (user_id, headers).
    """
    counter = {"n": 0}

    def _make(email=None, role=ROLES["USER"], plan_slug=None, active=True):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        with app.app_context():
            user_id = User(email=email, password="secret123", name="Test", role=role, active=active).save()
            if plan_slug:
                plan = PlanCatalog(app.extensions["mongo"]).get_plan_by_slug(plan_slug)
                start, end = Plan.compute_period(plan["interval"])
                User.assign_plan(user_id, plan, start, end)
            token, _ = generate_access_token(User.get_by_id(user_id))
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def admin(make_user):
    return make_user(email="admin@example.com", role=ROLES["ADMIN"])
