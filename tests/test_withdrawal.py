import pytest

from bto.entities import ApplicationStatus, FlatType, RequestStatus
from bto.errors import ApplicationStateError, PermissionDeniedError


@pytest.fixture
def officer_on_sun(session, users, projects, today):
    reg = session.registrations.registerOfficer(users["daniel"], projects["SUN001"], today)
    session.registrations.approveRegistration(users["jessica"], reg)
    return users["daniel"]


def _book(session, applicant, project, flat_type, manager, officer, today):
    app = session.applications.submitApplication(applicant, project, flat_type, today)
    session.applications.approveApplication(manager, app, today)
    session.applications.bookFlat(officer, app, today)
    return app


def test_withdraw_pending_application(session, users, projects, today):
    sarah, jessica = users["sarah"], users["jessica"]
    app = session.applications.submitApplication(sarah, projects["SUN001"], FlatType.TWO_ROOM, today)
    request = session.withdrawals.requestWithdrawal(sarah, app, today)

    assert session.withdrawals.pendingRequestsFor(jessica) == [request]
    assert session.withdrawals.requestsFor(sarah) == [request]
    session.withdrawals.approveWithdrawal(jessica, request, today)

    assert app.applicationStatus == ApplicationStatus.WITHDRAWN
    assert request.status == RequestStatus.APPROVED
    assert request.processedBy is jessica
    assert projects["SUN001"].availableUnits(FlatType.TWO_ROOM) == 2
    assert session.applications.activeApplication(sarah) is None


def test_withdrawing_booked_flat_leaves_other_bookings_alone(session, users, projects, officer_on_sun, today):
    sun, jessica = projects["SUN001"], users["jessica"]
    sarah_app = _book(session, users["sarah"], sun, FlatType.TWO_ROOM, jessica, officer_on_sun, today)
    john_app = _book(session, users["john"], sun, FlatType.TWO_ROOM, jessica, officer_on_sun, today)
    assert sun.availableUnits(FlatType.TWO_ROOM) == 0

    request = session.withdrawals.requestWithdrawal(users["sarah"], sarah_app, today)
    session.withdrawals.approveWithdrawal(jessica, request, today)

    assert sarah_app.applicationStatus == ApplicationStatus.WITHDRAWN
    assert john_app.applicationStatus == ApplicationStatus.BOOKED
    assert sun.availableUnits(FlatType.TWO_ROOM) == 1
    assert sun.availableUnits(FlatType.THREE_ROOM) == 1


def test_withdrawing_successful_application_keeps_quota(session, users, projects, today):
    sun, jessica = projects["SUN001"], users["jessica"]
    app = session.applications.submitApplication(users["sarah"], sun, FlatType.THREE_ROOM, today)
    session.applications.approveApplication(jessica, app, today)
    request = session.withdrawals.requestWithdrawal(users["sarah"], app, today)
    session.withdrawals.approveWithdrawal(jessica, request, today)
    assert sun.availableUnits(FlatType.THREE_ROOM) == 1
    # the reservation is released, so another applicant can now be approved
    other = session.applications.submitApplication(users["grace"], sun, FlatType.THREE_ROOM, today)
    session.applications.approveApplication(jessica, other, today)
    assert other.applicationStatus == ApplicationStatus.SUCCESSFUL


def test_rejected_withdrawal_keeps_status(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    request = session.withdrawals.requestWithdrawal(users["sarah"], app, today)
    session.withdrawals.rejectWithdrawal(users["jessica"], request, today)
    assert app.applicationStatus == ApplicationStatus.PENDING
    assert request.status == RequestStatus.REJECTED
    assert not session.withdrawals.hasPendingRequest(app)


def test_duplicate_request_refused(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    session.withdrawals.requestWithdrawal(users["sarah"], app, today)
    with pytest.raises(ApplicationStateError):
        session.withdrawals.requestWithdrawal(users["sarah"], app, today)


def test_unsuccessful_application_cannot_be_withdrawn(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    session.applications.rejectApplication(users["jessica"], app, today)
    with pytest.raises(ApplicationStateError):
        session.withdrawals.requestWithdrawal(users["sarah"], app, today)


def test_cannot_withdraw_someone_elses_application(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    with pytest.raises(PermissionDeniedError):
        session.withdrawals.requestWithdrawal(users["john"], app, today)


def test_other_manager_cannot_decide(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    request = session.withdrawals.requestWithdrawal(users["sarah"], app, today)
    with pytest.raises(PermissionDeniedError):
        session.withdrawals.approveWithdrawal(users["michael"], request, today)
    session.withdrawals.approveWithdrawal(users["jessica"], request, today)
    with pytest.raises(ApplicationStateError):
        session.withdrawals.rejectWithdrawal(users["jessica"], request, today)
