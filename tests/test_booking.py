import pytest

from bto.entities import ApplicationStatus, FlatType
from bto.errors import ApplicationStateError, NotFoundError, PermissionDeniedError, QuotaError


@pytest.fixture
def handled_sun(session, users, projects, today):
    """Daniel approved as officer for Sunrise Heights."""
    reg = session.registrations.registerOfficer(users["daniel"], projects["SUN001"], today)
    session.registrations.approveRegistration(users["jessica"], reg)
    return projects["SUN001"]


def _successful(session, applicant, project, flat_type, manager, today):
    app = session.applications.submitApplication(applicant, project, flat_type, today)
    session.applications.approveApplication(manager, app, today)
    return app


def test_booking_decrements_quota_by_exactly_one(session, users, handled_sun, today):
    app = _successful(session, users["sarah"], handled_sun, FlatType.TWO_ROOM, users["jessica"], today)
    receipt = session.applications.bookFlat(users["daniel"], app, today)

    assert app.applicationStatus == ApplicationStatus.BOOKED
    assert handled_sun.availableUnits(FlatType.TWO_ROOM) == 1
    assert handled_sun.availableUnits(FlatType.THREE_ROOM) == 1
    assert receipt.application is app
    assert session.applications.receiptFor(app) is receipt


def test_receipt_lists_booking_details(session, users, handled_sun, today):
    app = _successful(session, users["sarah"], handled_sun, FlatType.THREE_ROOM, users["jessica"], today)
    text = session.applications.bookFlat(users["daniel"], app, today).render()
    for expected in ("Sarah", "T7654321B", "Married", "Sunrise Heights", "3-Room", "$450,000"):
        assert expected in text


def test_booking_never_goes_below_zero(session, users, handled_sun, today):
    app = _successful(session, users["sarah"], handled_sun, FlatType.THREE_ROOM, users["jessica"], today)
    handled_sun.flatTypes[FlatType.THREE_ROOM]["units"] = 0
    with pytest.raises(QuotaError):
        session.applications.bookFlat(users["daniel"], app, today)
    assert handled_sun.availableUnits(FlatType.THREE_ROOM) == 0
    assert app.applicationStatus == ApplicationStatus.SUCCESSFUL


def test_reduce_units_clamps_at_zero(projects):
    sun = projects["SUN001"]
    sun.reduceUnits(FlatType.TWO_ROOM, 5)
    assert sun.availableUnits(FlatType.TWO_ROOM) == 0


def test_only_handling_officer_can_book(session, users, handled_sun, today):
    app = _successful(session, users["sarah"], handled_sun, FlatType.TWO_ROOM, users["jessica"], today)
    with pytest.raises(PermissionDeniedError):
        session.applications.bookFlat(users["emily"], app, today)


def test_pending_application_cannot_be_booked(session, users, handled_sun, today):
    app = session.applications.submitApplication(users["sarah"], handled_sun, FlatType.TWO_ROOM, today)
    with pytest.raises(ApplicationStateError):
        session.applications.bookFlat(users["daniel"], app, today)
    assert handled_sun.availableUnits(FlatType.TWO_ROOM) == 2


def test_no_receipt_before_booking(session, users, handled_sun, today):
    app = _successful(session, users["sarah"], handled_sun, FlatType.TWO_ROOM, users["jessica"], today)
    with pytest.raises(NotFoundError):
        session.applications.receiptFor(app)
