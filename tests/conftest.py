"""
Shared fixtures: a small in-memory DataStore and a Session pinned to a
fixed date so application periods are predictable.
"""

import datetime
import logging

import pytest

from bto.entities import (
    Applicant, BTOProject, FlatType, HDBManager, HDBOfficer, MaritalStatus,
)
from bto.repository import DataStore
from bto.session import Session

TODAY = datetime.date(2026, 10, 18)


def build_store():
    store = DataStore()
    store.applicants = [
        Applicant("S1234567A", "password", 35, MaritalStatus.SINGLE, "John"),
        Applicant("T7654321B", "password", 40, MaritalStatus.MARRIED, "Sarah"),
        Applicant("S9876543C", "password", 37, MaritalStatus.MARRIED, "Grace"),
        Applicant("S3456789E", "password", 25, MaritalStatus.SINGLE, "Rachel"),
        Applicant("T2345678D", "password", 20, MaritalStatus.MARRIED, "James"),
    ]
    store.officers = [
        HDBOfficer("T2109876H", "password", 36, MaritalStatus.SINGLE, "Daniel"),
        HDBOfficer("S6543210I", "password", 28, MaritalStatus.SINGLE, "Emily"),
    ]
    store.managers = [
        HDBManager("S5678901G", "password", 26, MaritalStatus.MARRIED, "Jessica"),
        HDBManager("T8765432F", "password", 36, MaritalStatus.SINGLE, "Michael"),
    ]
    jessica, michael = store.managers
    store.projects = [
        BTOProject(
            "SUN001", "Sunrise Heights", "Yishun",
            {FlatType.TWO_ROOM: {"units": 2, "price": 350000},
             FlatType.THREE_ROOM: {"units": 1, "price": 450000}},
            datetime.date(2026, 9, 1), datetime.date(2027, 3, 31), jessica, 2,
        ),
        BTOProject(
            "GAR001", "Garden View", "Boon Lay",
            {FlatType.TWO_ROOM: {"units": 5, "price": 320000},
             FlatType.THREE_ROOM: {"units": 5, "price": 420000}},
            datetime.date(2026, 10, 1), datetime.date(2027, 1, 31), michael, 1,
        ),
        BTOProject(
            "SKY001", "Skyline Residences", "Tampines",
            {FlatType.TWO_ROOM: {"units": 10, "price": 380000},
             FlatType.THREE_ROOM: {"units": 0, "price": 480000}},
            datetime.date(2027, 4, 1), datetime.date(2027, 7, 31), jessica, 3,
            visibility=False,
        ),
    ]
    return store


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def store():
    return build_store()


@pytest.fixture
def session(store):
    return Session(store, repository=None, today=TODAY)


@pytest.fixture
def users(store):
    """Users by first name."""
    return {u.name.lower(): u for u in store.users}


@pytest.fixture
def projects(store):
    return {p.projectID: p for p in store.projects}


@pytest.fixture
def scripted_input(monkeypatch):
    """Feed a fixed list of answers to input(); running out fails the test."""
    def feed(*answers):
        it = iter(answers)

        def fake_input(message=""):
            try:
                return next(it)
            except StopIteration:
                raise AssertionError(f"Unexpected prompt: {message!r}")

        monkeypatch.setattr("builtins.input", fake_input)
    return feed


@pytest.fixture
def restore_bto_logger():
    """Put the package logger back the way it was after configure_logging()."""
    logger = logging.getLogger("bto")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
