"""
Withdrawal requests: raised by the applicant, decided by the manager.

Approving a withdrawal marks the application Withdrawn. A booked flat goes
back into its own flat type's quota; units held by other applicants are
left alone.
"""

import datetime

from bto.entities import ApplicationStatus, HDBManager, RequestStatus, WithdrawalRequest
from bto.errors import ApplicationStateError, PermissionDeniedError
from bto.logging_config import get_logger

logger = get_logger(__name__)


class WithdrawalController:
    def __init__(self, store):
        self.store = store

    def hasPendingRequest(self, application):
        return any(w.application is application and w.isPending() for w in self.store.withdrawals)

    def requestsFor(self, applicant):
        return [w for w in self.store.withdrawals if w.application.applicant is applicant]

    def pendingRequestsFor(self, manager):
        return [w for w in self.store.withdrawals
                if w.isPending() and w.application.project.manager is manager]

    def requestWithdrawal(self, applicant, application, today=None):
        if application.applicant is not applicant:
            raise PermissionDeniedError("You can only withdraw your own application.")
        if not application.isActive():
            raise ApplicationStateError(
                f"This application is {application.applicationStatus}; cannot withdraw."
            )
        if self.hasPendingRequest(application):
            raise ApplicationStateError("A withdrawal request is already awaiting the manager's decision.")
        request = WithdrawalRequest(application, today or datetime.date.today())
        self.store.withdrawals.append(request)
        logger.info("Withdrawal requested for application %s", application.applicationID)
        return request

    def _requirePending(self, manager, request):
        if not isinstance(manager, HDBManager) or request.application.project.manager is not manager:
            raise PermissionDeniedError("You are not the manager of this project.")
        if not request.isPending():
            raise ApplicationStateError("This withdrawal request has already been processed.")

    def approveWithdrawal(self, manager, request, today=None):
        self._requirePending(manager, request)
        today = today or datetime.date.today()
        app = request.application
        if not app.isActive():
            raise ApplicationStateError("Application cannot be withdrawn from this state.")
        if app.applicationStatus == ApplicationStatus.BOOKED:
            app.project.restoreUnits(app.chosen_flat_type, 1)
        app.updateStatus(ApplicationStatus.WITHDRAWN, today)
        request.status = RequestStatus.APPROVED
        request.processedDate = today
        request.processedBy = manager
        logger.info("Withdrawal of %s approved by %s", app.applicationID, manager.userID)

    def rejectWithdrawal(self, manager, request, today=None):
        self._requirePending(manager, request)
        request.status = RequestStatus.REJECTED
        request.processedDate = today or datetime.date.today()
        request.processedBy = manager
        logger.info("Withdrawal of %s rejected by %s", request.application.applicationID, manager.userID)
