import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Activate the opinalocal domain for the whole session.

    The domain context pushed here is what `current_domain` resolves to in
    tests and in the code under test.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from opinalocal.domain import opinalocal

    opinalocal.init()
    opinalocal.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Mark tests by the directory they live in."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from opinalocal.domain import opinalocal
    from opinalocal.utils.db import drop_db, setup_db

    setup_db(opinalocal)

    yield

    drop_db(opinalocal)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Clean up stores and fake channels after every test."""
    from opinalocal.channel import reset_channels

    reset_channels()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()

    reset_channels()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    """Register a user through the command and return its id."""
    from protean import current_domain

    from opinalocal.user.registration import RegisterUser

    counter = {"n": 0}

    def _register(name="Ana Souza", email=None, external_id=None, **preferences):
        counter["n"] += 1
        n = counter["n"]
        user_id = current_domain.process(
            RegisterUser(
                external_id=external_id or f"uid-{n}",
                email=email or f"user{n}@example.com",
                name=name,
            ),
            asynchronous=False,
        )
        if preferences:
            from opinalocal.user.preferences import UpdateNotificationPreferences

            current_domain.process(
                UpdateNotificationPreferences(user_id=user_id, **preferences),
                asynchronous=False,
            )
        return user_id

    return _register


@pytest.fixture()
def register_restaurant(register_user):
    from protean import current_domain

    from opinalocal.restaurant.registration import RegisterRestaurant

    def _register(name="Cantina da Praça", created_by=None, full_address=None, **extra):
        owner = created_by or register_user(name="Restaurant Creator")
        return current_domain.process(
            RegisterRestaurant(
                name=name,
                street="Rua das Flores, 10",
                city="Curitiba",
                state="PR",
                postal_code="80010-000",
                full_address=full_address or f"Rua das Flores, 10 - Centro, Curitiba - PR ({name})",
                created_by=owner,
                **extra,
            ),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def submit_review():
    import json

    from protean import current_domain

    from opinalocal.review.submission import SubmitReview

    def _submit(
        user_id,
        restaurant_id,
        standard=None,
        custom=None,
        text="Boa comida e ótimo atendimento.",
        visit_date="2024-12-15",
        photos=None,
    ):
        return current_domain.process(
            SubmitReview(
                user_id=user_id,
                restaurant_id=restaurant_id,
                text=text,
                visit_date=visit_date,
                standard=json.dumps(standard if standard is not None else {"Food": 4}),
                custom=json.dumps(custom or {}),
                photos=json.dumps(photos) if photos is not None else None,
            ),
            asynchronous=False,
        )

    return _submit


@pytest.fixture()
def api_client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from protean.integrations.fastapi import register_exception_handlers

    from opinalocal.api import (
        category_router,
        comment_router,
        restaurant_router,
        review_router,
        user_router,
    )
    from opinalocal.api.errors import register_error_handlers

    app = FastAPI()
    for router in (user_router, restaurant_router, category_router, review_router, comment_router):
        app.include_router(router)
    register_exception_handlers(app)
    register_error_handlers(app)
    return TestClient(app)
