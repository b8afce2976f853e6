"""
HDB officer registrations for handling projects.

Officer cannot register if:
  - They have applied for that project as an Applicant
  - They already hold a pending or approved registration for a project
    whose application period overlaps this one
  - The project has no officer slots left
"""

import datetime

from bto.entities import HDBManager, HDBOfficer, Registration, RegistrationStatus
from bto.errors import PermissionDeniedError, RegistrationError
from bto.logging_config import get_logger
from bto.validation import periods_overlap

logger = get_logger(__name__)


class RegistrationController:
    def __init__(self, store):
        self.store = store

    def registrationsFor(self, officer):
        return [r for r in self.store.registrations if r.officer is officer]

    def registrationFor(self, officer, project):
        for r in self.store.registrations:
            if r.officer is officer and r.project is project and r.isLive():
                return r
        return None

    def isRegisteredFor(self, officer, project):
        return self.registrationFor(officer, project) is not None

    def isHandling(self, officer, project):
        return isinstance(officer, HDBOfficer) and officer in project.officers

    def handledProjects(self, officer):
        return [p for p in self.store.projects if officer in p.officers]

    def pendingRegistrationsFor(self, manager):
        return [r for r in self.store.registrations
                if r.status == RegistrationStatus.PENDING and r.project.manager is manager]

    def registerOfficer(self, officer, project, today=None):
        if not isinstance(officer, HDBOfficer):
            raise PermissionDeniedError("Only HDB officers can register to handle a project.")
        if self.isRegisteredFor(officer, project):
            raise RegistrationError(f"You are already registered for '{project.projectName}'.")
        for app in self.store.applications:
            if app.applicant is officer and app.project is project:
                raise RegistrationError(
                    "You have already applied for this project as an Applicant. Cannot register as Officer."
                )
        for r in self.registrationsFor(officer):
            if not r.isLive():
                continue
            if periods_overlap(r.project.applicationOpenDate, r.project.applicationCloseDate,
                               project.applicationOpenDate, project.applicationCloseDate):
                raise RegistrationError(
                    f"Your registration for '{r.project.projectName}' overlaps this project's application period."
                )
        if project.remainingOfficerSlots() <= 0:
            raise RegistrationError("No officer slots left for this project.")

        registration = Registration(
            self.store.nextID("REG", [r.registrationID for r in self.store.registrations]),
            officer, project, RegistrationStatus.PENDING, today or datetime.date.today(),
        )
        self.store.registrations.append(registration)
        logger.info("Officer %s registered for project %s", officer.userID, project.projectID)
        return registration

    def _requirePending(self, manager, registration):
        if not isinstance(manager, HDBManager) or registration.project.manager is not manager:
            raise PermissionDeniedError("You are not the manager of this project.")
        if registration.status != RegistrationStatus.PENDING:
            raise RegistrationError("Officer's registration is not pending.")

    def approveRegistration(self, manager, registration):
        self._requirePending(manager, registration)
        project = registration.project
        if project.remainingOfficerSlots() <= 0:
            raise RegistrationError("No more officer slots available.")
        registration.status = RegistrationStatus.APPROVED
        if registration.officer not in project.officers:
            project.officers.append(registration.officer)
        logger.info("Registration %s approved by %s", registration.registrationID, manager.userID)

    def rejectRegistration(self, manager, registration):
        self._requirePending(manager, registration)
        registration.status = RegistrationStatus.REJECTED
        logger.info("Registration %s rejected by %s", registration.registrationID, manager.userID)
