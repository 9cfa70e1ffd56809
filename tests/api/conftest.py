"""Fixtures for the HTTP layer tests."""

from contextlib import contextmanager
from unittest import mock

import pytest


@pytest.fixture
def borrowed_session(session):
    """Route the pay transaction endpoint to the in-memory test session."""

    @contextmanager
    def borrow():
        yield session

    with mock.patch("pay_api.api.transactions.borrow_db_session", borrow):
        yield session
