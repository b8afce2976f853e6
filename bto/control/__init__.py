"""Control layer: business rules over the records in a DataStore."""

from bto.control.application import ApplicationController
from bto.control.enquiry import EnquiryController
from bto.control.officer import RegistrationController
from bto.control.project import ProjectController, ProjectFilter
from bto.control.report import ReportController, ReportCriteria
from bto.control.user import UserController
from bto.control.withdrawal import WithdrawalController

__all__ = [
    "ApplicationController",
    "EnquiryController",
    "ProjectController",
    "ProjectFilter",
    "RegistrationController",
    "ReportController",
    "ReportCriteria",
    "UserController",
    "WithdrawalController",
]
