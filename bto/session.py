"""
Per-process session state: the loaded records, the controllers working on
them, and who is signed in.
"""

import datetime

from bto.control import (
    ApplicationController, EnquiryController, ProjectController, ProjectFilter,
    RegistrationController, ReportController, UserController, WithdrawalController,
)
from bto.errors import DataFileError
from bto.logging_config import get_logger

logger = get_logger(__name__)


class Session:
    def __init__(self, store, repository=None, max_officer_slots=10, today=None):
        self.store = store
        self.repository = repository
        self._today = today
        self.user = None
        self.project_filter = ProjectFilter()

        self.users = UserController(store)
        self.projects = ProjectController(store, max_officer_slots)
        self.applications = ApplicationController(store)
        self.withdrawals = WithdrawalController(store)
        self.registrations = RegistrationController(store)
        self.enquiries = EnquiryController(store)
        self.reports = ReportController(store)

    def today(self):
        return self._today or datetime.date.today()

    def signIn(self, user):
        self.user = user
        self.project_filter.reset()

    def signOut(self):
        logger.info("%s signed out", self.user.userID if self.user else "nobody")
        self.user = None
        self.project_filter.reset()

    def save(self):
        """Write every file back; returns False when the write failed."""
        if self.repository is None:
            return True
        try:
            self.repository.save(self.store)
        except DataFileError as e:
            logger.error("Saving data failed: %s", e)
            print(f"Error saving data: {e}")
            return False
        return True
