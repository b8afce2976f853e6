"""
Project creation, editing and listing.

A manager is in charge of at most one project per application period, and
a project never holds more officers than its officer slots.
"""

import datetime

from bto.control.eligibility import isEligibleForProject
from bto.entities import BTOProject, FlatType, HDBManager, Role
from bto.errors import NotFoundError, PermissionDeniedError, ProjectError
from bto.logging_config import get_logger
from bto.validation import periods_overlap

logger = get_logger(__name__)

SORT_KEYS = ("name", "neighborhood", "closing", "availability")


class ProjectFilter:
    """
    Listing preferences kept for the rest of a session.
    """
    def __init__(self, neighborhood=None, flat_type=None, sort_by="name"):
        self.neighborhood = neighborhood
        self.flat_type = flat_type
        self.sort_by = sort_by

    def reset(self):
        self.neighborhood = None
        self.flat_type = None
        self.sort_by = "name"

    def apply(self, projects):
        result = list(projects)
        if self.neighborhood:
            result = [p for p in result if p.neighborhood.lower() == self.neighborhood.lower()]
        if self.flat_type:
            result = [p for p in result if p.offers(self.flat_type)]

        if self.sort_by == "neighborhood":
            result.sort(key=lambda p: (p.neighborhood.lower(), p.projectName.lower()))
        elif self.sort_by == "closing":
            result.sort(key=lambda p: (p.applicationCloseDate or datetime.date.max, p.projectName.lower()))
        elif self.sort_by == "availability":
            result.sort(key=lambda p: (-p.totalAvailableUnits(), p.projectName.lower()))
        else:
            result.sort(key=lambda p: p.projectName.lower())
        return result

    def describe(self):
        parts = []
        if self.neighborhood:
            parts.append(f"neighborhood={self.neighborhood}")
        if self.flat_type:
            parts.append(f"flat type={self.flat_type}")
        parts.append(f"sort={self.sort_by}")
        return ", ".join(parts)


class ProjectController:
    def __init__(self, store, max_officer_slots=10):
        self.store = store
        self.max_officer_slots = max_officer_slots

    @property
    def projects(self):
        return self.store.projects

    def findProjectByID(self, pid):
        project = self.store.findProject(pid)
        if project is None:
            raise NotFoundError(f"Project '{pid}' not found.")
        return project

    def projectsByManager(self, manager):
        return [p for p in self.store.projects if p.manager is manager]

    def handledBy(self, officer):
        return [p for p in self.store.projects if officer in p.officers]

    def visibleProjectsFor(self, user, project_filter=None, as_applicant=False):
        if user.role == Role.MANAGER and not as_applicant:
            projects = list(self.store.projects)
        else:
            projects = [p for p in self.store.projects
                        if p.visibility and isEligibleForProject(user, p)]
            if user.role == Role.OFFICER and not as_applicant:
                projects += [p for p in self.handledBy(user) if p not in projects]
        return (project_filter or ProjectFilter()).apply(projects)

    def _generateProjectID(self, name):
        prefix = "".join(ch for ch in name.upper() if ch.isalnum())[:3] or "PRJ"
        return self.store.nextID(prefix, [p.projectID for p in self.store.projects], width=3)

    def _checkManagerPeriod(self, manager, open_date, close_date, ignore=None):
        for p in self.projectsByManager(manager):
            if p is ignore:
                continue
            if periods_overlap(open_date, close_date, p.applicationOpenDate, p.applicationCloseDate):
                raise ProjectError(
                    f"You already manage '{p.projectName}' during "
                    f"{p.applicationOpenDate} to {p.applicationCloseDate}."
                )

    def _checkDetails(self, name, flat_types, open_date, close_date, slot):
        if not name or not name.strip():
            raise ProjectError("Project name cannot be empty.")
        if open_date is None or close_date is None:
            raise ProjectError("Opening and closing dates are required.")
        if close_date < open_date:
            raise ProjectError("Closing date cannot be before opening date.")
        if not 1 <= slot <= self.max_officer_slots:
            raise ProjectError(f"Officer slots must be between 1 and {self.max_officer_slots}.")
        for ft, info in flat_types.items():
            if info["units"] < 0 or info["price"] < 0:
                raise ProjectError(f"Units and price for {ft} cannot be negative.")

    def _requireManager(self, manager, project):
        if not isinstance(manager, HDBManager) or project.manager is not manager:
            raise PermissionDeniedError("You are not the manager of this project.")

    def createProject(self, manager, name, neighborhood, flat_types, open_date, close_date, slot):
        if not isinstance(manager, HDBManager):
            raise PermissionDeniedError("Only HDB managers can create projects.")
        self._checkDetails(name, flat_types, open_date, close_date, slot)
        if any(p.projectName.lower() == name.strip().lower() for p in self.store.projects):
            raise ProjectError(f"A project named '{name}' already exists.")
        self._checkManagerPeriod(manager, open_date, close_date)

        project = BTOProject(self._generateProjectID(name), name.strip(), neighborhood.strip(),
                             flat_types, open_date, close_date, manager, slot)
        self.store.projects.append(project)
        logger.info("Manager %s created project %s", manager.userID, project.projectID)
        return project

    def editProject(self, manager, project, new_name=None, new_neighborhood=None, new_flat_types=None,
                    new_open_date=None, new_close_date=None, new_slot=None):
        self._requireManager(manager, project)
        name = new_name or project.projectName
        flat_types = new_flat_types or project.flatTypes
        open_date = new_open_date or project.applicationOpenDate
        close_date = new_close_date or project.applicationCloseDate
        slot = new_slot if new_slot is not None else project.officerSlot

        self._checkDetails(name, flat_types, open_date, close_date, slot)
        if slot < len(project.officers):
            raise ProjectError(f"{len(project.officers)} officers are already assigned; "
                               f"slots cannot drop below that.")
        if new_name and any(p is not project and p.projectName.lower() == new_name.lower()
                            for p in self.store.projects):
            raise ProjectError(f"A project named '{new_name}' already exists.")
        if new_open_date or new_close_date:
            self._checkManagerPeriod(manager, open_date, close_date, ignore=project)

        project.projectName = name
        if new_neighborhood:
            project.neighborhood = new_neighborhood
        project.flatTypes = flat_types
        project.applicationOpenDate = open_date
        project.applicationCloseDate = close_date
        project.officerSlot = slot
        logger.info("Manager %s edited project %s", manager.userID, project.projectID)
        return project

    def deleteProject(self, manager, project):
        self._requireManager(manager, project)
        if any(a.project is project for a in self.store.applications):
            raise ProjectError("Cannot delete a project that already has applications.")
        self.store.projects.remove(project)
        self.store.registrations = [r for r in self.store.registrations if r.project is not project]
        self.store.enquiries = [e for e in self.store.enquiries if e.project is not project]
        logger.info("Manager %s deleted project %s", manager.userID, project.projectID)

    def toggleVisibility(self, manager, project, is_visible):
        self._requireManager(manager, project)
        project.visibility = is_visible
        logger.info("Project %s visibility set to %s", project.projectID, is_visible)


def defaultFlatTypes(two_room_units, two_room_price, three_room_units, three_room_price):
    return {
        FlatType.TWO_ROOM: {"units": two_room_units, "price": two_room_price},
        FlatType.THREE_ROOM: {"units": three_room_units, "price": three_room_price},
    }

