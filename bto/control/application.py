"""
BTO application lifecycle.

    Pending -> Successful -> Booked
    Pending -> Unsuccessful
    Pending | Successful | Booked -> Withdrawn   (see bto.control.withdrawal)

An applicant holds at most one active (Pending, Successful or Booked)
application. Manager approval reserves supply; only booking takes a unit
off the project's quota.
"""

import datetime

from bto.control.eligibility import checkEligibility
from bto.entities import (
    Applicant, Application, ApplicationStatus, HDBManager, HDBOfficer, Receipt,
)
from bto.errors import (
    ApplicationStateError, NotFoundError, PermissionDeniedError, QuotaError,
)
from bto.logging_config import get_logger
from bto.validation import normalize_nric

logger = get_logger(__name__)


class ApplicationController:
    def __init__(self, store):
        self.store = store

    @property
    def applications(self):
        return self.store.applications

    def applicationsFor(self, applicant):
        return [a for a in self.store.applications if a.applicant is applicant]

    def activeApplication(self, applicant):
        for app in self.applicationsFor(applicant):
            if app.isActive():
                return app
        return None

    def applicationsForProject(self, project, status=None):
        return [a for a in self.store.applications
                if a.project is project and (status is None or a.applicationStatus == status)]

    def pendingApplicationsFor(self, manager):
        return [a for a in self.store.applications
                if a.applicationStatus == ApplicationStatus.PENDING and a.project.manager is manager]

    def findApplicationByNRIC(self, nric, project):
        nric = normalize_nric(nric)
        for app in self.store.applications:
            if app.applicant.userID == nric and app.project is project and app.isActive():
                return app
        raise NotFoundError(f"No application found for NRIC {nric} in {project.projectName}.")

    def reservedUnits(self, project, flat_type):
        """Successful applications still waiting to book this flat type."""
        return sum(1 for a in self.applicationsForProject(project, ApplicationStatus.SUCCESSFUL)
                   if a.chosen_flat_type == flat_type)

    def submitApplication(self, applicant, project, flat_type, today=None):
        today = today or datetime.date.today()
        if not isinstance(applicant, Applicant):
            raise PermissionDeniedError("Only applicants can apply for a BTO project.")

        active = self.activeApplication(applicant)
        if active is not None:
            raise ApplicationStateError(
                f"You already have an active application for '{active.project.projectName}'. Cannot apply again."
            )
        checkEligibility(applicant, flat_type)

        if not project.visibility:
            raise ApplicationStateError("Project is not visible.")
        if not project.isOpen(today):
            raise ApplicationStateError("Not within application period.")
        if isinstance(applicant, HDBOfficer):
            for r in self.store.registrations:
                if r.officer is applicant and r.project is project and r.isLive():
                    raise PermissionDeniedError(
                        "You are registered to handle this project and cannot apply for it."
                    )
        if not project.offers(flat_type):
            raise QuotaError(f"Project '{project.projectName}' does not offer {flat_type}.")
        if project.availableUnits(flat_type) <= 0:
            raise QuotaError(f"No available units for {flat_type} in project '{project.projectName}'.")

        app = Application(
            self.store.nextID("APP", [a.applicationID for a in self.store.applications]),
            applicant, project, flat_type, ApplicationStatus.PENDING, today, today,
        )
        self.store.applications.append(app)
        logger.info("Application %s submitted by %s for %s (%s)",
                    app.applicationID, applicant.userID, project.projectID, flat_type)
        return app

    def _requirePending(self, manager, application):
        if not isinstance(manager, HDBManager) or application.project.manager is not manager:
            raise PermissionDeniedError("You are not the manager of this project.")
        if application.applicationStatus != ApplicationStatus.PENDING:
            raise ApplicationStateError("This application is not Pending. Cannot approve/reject.")

    def approveApplication(self, manager, application, today=None):
        self._requirePending(manager, application)
        project = application.project
        ft = application.chosen_flat_type
        if project.availableUnits(ft) - self.reservedUnits(project, ft) <= 0:
            raise QuotaError("Not enough units left for that flat type! Cannot approve.")
        application.updateStatus(ApplicationStatus.SUCCESSFUL, today)
        logger.info("Application %s approved by %s", application.applicationID, manager.userID)

    def rejectApplication(self, manager, application, today=None):
        self._requirePending(manager, application)
        application.updateStatus(ApplicationStatus.UNSUCCESSFUL, today)
        logger.info("Application %s rejected by %s", application.applicationID, manager.userID)

    def bookFlat(self, officer, application, today=None):
        """Book the chosen flat for a successful applicant and issue the receipt."""
        project = application.project
        if not isinstance(officer, HDBOfficer) or officer not in project.officers:
            raise PermissionDeniedError("You are not handling this project.")
        if application.applicationStatus != ApplicationStatus.SUCCESSFUL:
            raise ApplicationStateError(
                f"Only successful applications can be booked (current status: {application.applicationStatus})."
            )
        ft = application.chosen_flat_type
        if project.availableUnits(ft) <= 0:
            raise QuotaError(f"No {ft} units left in '{project.projectName}'.")

        project.reduceUnits(ft, 1)
        application.updateStatus(ApplicationStatus.BOOKED, today)
        receipt = Receipt(
            self.store.nextID("RCT", [r.receiptID for r in self.store.receipts]),
            application, officer, today or datetime.date.today(),
        )
        self.store.receipts.append(receipt)
        logger.info("Officer %s booked %s for application %s (%d left)",
                    officer.userID, ft, application.applicationID, project.availableUnits(ft))
        return receipt

    def receiptFor(self, application):
        for receipt in self.store.receipts:
            if receipt.application is application:
                return receipt
        raise NotFoundError("No booking receipt found for this application.")
