import datetime

import pytest

from bto.entities import ApplicationStatus, FlatType
from bto.errors import (
    ApplicationStateError, EligibilityError, NotFoundError, PermissionDeniedError, QuotaError,
)


def test_submit_application_creates_pending_record(session, users, projects, today):
    app = session.applications.submitApplication(users["john"], projects["SUN001"], FlatType.TWO_ROOM, today)
    assert app.applicationID == "APP0001"
    assert app.applicationStatus == ApplicationStatus.PENDING
    assert app.applicationDate == today
    assert session.store.applications == [app]


def test_single_under_35_cannot_submit(session, users, projects, today):
    with pytest.raises(EligibilityError):
        session.applications.submitApplication(users["rachel"], projects["SUN001"], FlatType.TWO_ROOM, today)
    assert session.store.applications == []


def test_single_cannot_apply_for_three_room(session, users, projects, today):
    with pytest.raises(EligibilityError):
        session.applications.submitApplication(users["john"], projects["SUN001"], FlatType.THREE_ROOM, today)


def test_married_can_apply_for_three_room(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.THREE_ROOM, today)
    assert app.chosen_flat_type == FlatType.THREE_ROOM


def test_only_one_active_application(session, users, projects, today):
    sarah = users["sarah"]
    session.applications.submitApplication(sarah, projects["SUN001"], FlatType.TWO_ROOM, today)
    with pytest.raises(ApplicationStateError, match="active application"):
        session.applications.submitApplication(sarah, projects["GAR001"], FlatType.TWO_ROOM, today)


def test_can_reapply_after_unsuccessful(session, users, projects, today):
    sarah, jessica = users["sarah"], users["jessica"]
    first = session.applications.submitApplication(sarah, projects["SUN001"], FlatType.TWO_ROOM, today)
    session.applications.rejectApplication(jessica, first, today)
    second = session.applications.submitApplication(sarah, projects["GAR001"], FlatType.TWO_ROOM, today)
    assert session.applications.activeApplication(sarah) is second


def test_hidden_project_refused(session, users, projects):
    with pytest.raises(ApplicationStateError, match="not visible"):
        session.applications.submitApplication(users["john"], projects["SKY001"], FlatType.TWO_ROOM,
                                               datetime.date(2027, 5, 1))


def test_outside_application_period_refused(session, users, projects):
    with pytest.raises(ApplicationStateError, match="application period"):
        session.applications.submitApplication(users["john"], projects["GAR001"], FlatType.TWO_ROOM,
                                               datetime.date(2027, 2, 1))


def test_no_units_left_refused(session, users, projects, today):
    projects["SUN001"].flatTypes[FlatType.THREE_ROOM]["units"] = 0
    with pytest.raises(QuotaError):
        session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.THREE_ROOM, today)


def test_manager_cannot_apply(session, users, projects, today):
    with pytest.raises(PermissionDeniedError):
        session.applications.submitApplication(users["michael"], projects["SUN001"], FlatType.TWO_ROOM, today)


def test_officer_cannot_apply_for_project_they_registered_for(session, users, projects, today):
    daniel = users["daniel"]
    session.registrations.registerOfficer(daniel, projects["SUN001"], today)
    with pytest.raises(PermissionDeniedError):
        session.applications.submitApplication(daniel, projects["SUN001"], FlatType.TWO_ROOM, today)
    # a different project is fine
    session.applications.submitApplication(daniel, projects["GAR001"], FlatType.TWO_ROOM, today)


def test_approve_moves_to_successful(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    session.applications.approveApplication(users["jessica"], app, today)
    assert app.applicationStatus == ApplicationStatus.SUCCESSFUL
    # approval reserves supply but leaves the quota to booking
    assert projects["SUN001"].availableUnits(FlatType.TWO_ROOM) == 2


def test_only_manager_in_charge_can_approve(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    with pytest.raises(PermissionDeniedError):
        session.applications.approveApplication(users["michael"], app, today)
    assert app.applicationStatus == ApplicationStatus.PENDING


def test_approval_limited_by_remaining_supply(session, users, projects, today):
    sun = projects["SUN001"]
    first = session.applications.submitApplication(users["sarah"], sun, FlatType.THREE_ROOM, today)
    second = session.applications.submitApplication(users["grace"], sun, FlatType.THREE_ROOM, today)
    session.applications.approveApplication(users["jessica"], first, today)
    with pytest.raises(QuotaError):
        session.applications.approveApplication(users["jessica"], second, today)
    assert second.applicationStatus == ApplicationStatus.PENDING


def test_cannot_approve_twice(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    session.applications.rejectApplication(users["jessica"], app, today)
    assert app.applicationStatus == ApplicationStatus.UNSUCCESSFUL
    with pytest.raises(ApplicationStateError):
        session.applications.approveApplication(users["jessica"], app, today)


def test_find_application_by_nric(session, users, projects, today):
    app = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    assert session.applications.findApplicationByNRIC("t7654321b", projects["SUN001"]) is app
    with pytest.raises(NotFoundError):
        session.applications.findApplicationByNRIC("S1234567A", projects["SUN001"])


def test_pending_applications_for_manager(session, users, projects, today):
    a = session.applications.submitApplication(users["sarah"], projects["SUN001"], FlatType.TWO_ROOM, today)
    session.applications.submitApplication(users["john"], projects["GAR001"], FlatType.TWO_ROOM, today)
    assert session.applications.pendingApplicationsFor(users["jessica"]) == [a]
