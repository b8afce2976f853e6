import datetime

import pytest

from bto.control import ProjectFilter
from bto.control.project import defaultFlatTypes
from bto.entities import FlatType
from bto.errors import NotFoundError, PermissionDeniedError, ProjectError

LATER_OPEN = datetime.date(2027, 8, 1)
LATER_CLOSE = datetime.date(2027, 12, 31)


def _create(session, manager, name="New Horizons", open_date=LATER_OPEN, close_date=LATER_CLOSE, slot=3):
    return session.projects.createProject(
        manager, name, "Bedok", defaultFlatTypes(10, 200000, 20, 300000), open_date, close_date, slot,
    )


def test_create_project(session, users):
    project = _create(session, users["jessica"])
    assert project.projectID == "NEW001"
    assert project.manager is users["jessica"]
    assert project.visibility
    assert project.availableUnits(FlatType.THREE_ROOM) == 20
    assert session.projects.findProjectByID("new001") is project


def test_find_unknown_project(session):
    with pytest.raises(NotFoundError):
        session.projects.findProjectByID("NOPE001")


def test_only_managers_create(session, users):
    with pytest.raises(PermissionDeniedError):
        _create(session, users["daniel"])


def test_duplicate_name_refused(session, users):
    with pytest.raises(ProjectError, match="already exists"):
        _create(session, users["michael"], name="sunrise heights", open_date=datetime.date(2028, 1, 1),
                close_date=datetime.date(2028, 2, 1))


def test_close_before_open_refused(session, users):
    with pytest.raises(ProjectError, match="before"):
        _create(session, users["jessica"], open_date=LATER_CLOSE, close_date=LATER_OPEN)


def test_slot_limit(session, users):
    with pytest.raises(ProjectError, match="between 1 and 10"):
        _create(session, users["jessica"], slot=11)
    with pytest.raises(ProjectError):
        _create(session, users["jessica"], slot=0)


def test_manager_cannot_overlap_own_periods(session, users):
    with pytest.raises(ProjectError, match="Sunrise Heights"):
        _create(session, users["jessica"], open_date=datetime.date(2027, 3, 31),
                close_date=datetime.date(2027, 3, 31))
    # Michael's only project ends in January
    project = _create(session, users["michael"], open_date=datetime.date(2027, 2, 1),
                      close_date=datetime.date(2027, 5, 1))
    assert project.manager is users["michael"]


def test_edit_project(session, users, projects):
    sun = projects["SUN001"]
    session.projects.editProject(users["jessica"], sun, new_name="Sunrise Vista", new_neighborhood="Sembawang",
                                 new_slot=4)
    assert sun.projectName == "Sunrise Vista"
    assert sun.neighborhood == "Sembawang"
    assert sun.officerSlot == 4
    assert sun.applicationOpenDate == datetime.date(2026, 9, 1)


def test_edit_requires_owner(session, users, projects):
    with pytest.raises(PermissionDeniedError):
        session.projects.editProject(users["michael"], projects["SUN001"], new_name="Mine now")


def test_edit_cannot_drop_slots_below_officers(session, users, projects, today):
    sun = projects["SUN001"]
    for name in ("daniel", "emily"):
        reg = session.registrations.registerOfficer(users[name], sun, today)
        session.registrations.approveRegistration(users["jessica"], reg)
    with pytest.raises(ProjectError, match="already assigned"):
        session.projects.editProject(users["jessica"], sun, new_slot=1)
    assert sun.officerSlot == 2


def test_edit_dates_checked_against_other_projects(session, users, projects):
    with pytest.raises(ProjectError):
        session.projects.editProject(users["jessica"], projects["SKY001"],
                                     new_open_date=datetime.date(2027, 3, 1))


def test_delete_project(session, users, projects, today):
    sky = projects["SKY001"]
    session.registrations.registerOfficer(users["daniel"], sky, today)
    session.projects.deleteProject(users["jessica"], sky)
    assert sky not in session.projects.projects
    assert session.registrations.registrationsFor(users["daniel"]) == []


def test_delete_refused_with_applications(session, users, projects, today):
    sun = projects["SUN001"]
    session.applications.submitApplication(users["john"], sun, FlatType.TWO_ROOM, today)
    with pytest.raises(ProjectError, match="applications"):
        session.projects.deleteProject(users["jessica"], sun)
    assert sun in session.projects.projects


def test_toggle_visibility(session, users, projects):
    sky = projects["SKY001"]
    session.projects.toggleVisibility(users["jessica"], sky, True)
    assert sky.visibility
    with pytest.raises(PermissionDeniedError):
        session.projects.toggleVisibility(users["michael"], sky, False)


def test_applicants_see_visible_eligible_projects(session, users, projects):
    names = [p.projectID for p in session.projects.visibleProjectsFor(users["john"])]
    assert names == ["GAR001", "SUN001"]
    assert session.projects.visibleProjectsFor(users["rachel"]) == []


def test_single_applicant_skips_projects_without_two_room(session, users, projects):
    projects["GAR001"].flatTypes[FlatType.TWO_ROOM]["units"] = 0
    visible = session.projects.visibleProjectsFor(users["john"])
    assert visible == [projects["SUN001"]]
    assert projects["GAR001"] in session.projects.visibleProjectsFor(users["sarah"])


def test_managers_see_everything(session, users, projects):
    assert len(session.projects.visibleProjectsFor(users["michael"])) == 3
    assert session.projects.projectsByManager(users["jessica"]) == [projects["SUN001"], projects["SKY001"]]


def test_officer_sees_hidden_handled_project(session, users, projects, today):
    daniel, sky = users["daniel"], projects["SKY001"]
    reg = session.registrations.registerOfficer(daniel, sky, today)
    session.registrations.approveRegistration(users["jessica"], reg)
    assert sky in session.projects.visibleProjectsFor(daniel)
    assert sky not in session.projects.visibleProjectsFor(daniel, as_applicant=True)


def test_filter_and_sort(session, users, projects):
    sarah = users["sarah"]
    f = ProjectFilter(neighborhood="yishun")
    assert session.projects.visibleProjectsFor(sarah, f) == [projects["SUN001"]]

    f = ProjectFilter(sort_by="closing")
    assert session.projects.visibleProjectsFor(sarah, f) == [projects["GAR001"], projects["SUN001"]]

    f = ProjectFilter(sort_by="availability")
    assert session.projects.visibleProjectsFor(sarah, f) == [projects["GAR001"], projects["SUN001"]]

    f = ProjectFilter(sort_by="neighborhood")
    assert [p.neighborhood for p in session.projects.visibleProjectsFor(users["michael"], f)] == [
        "Boon Lay", "Tampines", "Yishun",
    ]
    assert f.describe() == "sort=neighborhood"
    f.reset()
    assert f.sort_by == "name"
