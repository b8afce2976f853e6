"""
Entity layer: users, projects and the records that link them.

These are plain records. Business rules live in bto.control; the only
behaviour here is bookkeeping on a single object (unit counts, status
changes, receipt text).
"""

import datetime
from enum import Enum

from bto.errors import InvalidInputError


class LabelEnum(Enum):
    """Enum whose values are the labels stored in CSV and shown in menus."""

    @classmethod
    def parse(cls, text):
        key = str(text).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        raise InvalidInputError(f"Unknown {cls.__name__} '{text}'.")

    def __str__(self):
        return self.value


class Role(LabelEnum):
    APPLICANT = "Applicant"
    OFFICER = "HDBOfficer"
    MANAGER = "HDBManager"


class MaritalStatus(LabelEnum):
    SINGLE = "Single"
    MARRIED = "Married"


class FlatType(LabelEnum):
    TWO_ROOM = "2-Room"
    THREE_ROOM = "3-Room"

    @classmethod
    def parse(cls, text):
        # menus accept the bare room count
        key = str(text).strip()
        if key == "2":
            return cls.TWO_ROOM
        if key == "3":
            return cls.THREE_ROOM
        return super().parse(text)


class ApplicationStatus(LabelEnum):
    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    UNSUCCESSFUL = "Unsuccessful"
    BOOKED = "Booked"
    WITHDRAWN = "Withdrawn"


ACTIVE_STATUSES = (
    ApplicationStatus.PENDING,
    ApplicationStatus.SUCCESSFUL,
    ApplicationStatus.BOOKED,
)


class RegistrationStatus(LabelEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class RequestStatus(LabelEnum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class User:
    """
    Base class for all users (Applicant, HDBOfficer, HDBManager).
    """
    role = None

    def __init__(self, user_id, password, age, marital_status, name):
        self.userID = user_id
        self.password = password
        self.age = age
        self.marital_status = marital_status
        self.name = name

    def isSingle(self):
        return self.marital_status == MaritalStatus.SINGLE

    def isMarried(self):
        return self.marital_status == MaritalStatus.MARRIED

    def __repr__(self):
        return f"{self.__class__.__name__}({self.userID!r}, {self.name!r})"


class Applicant(User):
    role = Role.APPLICANT


class HDBOfficer(Applicant):
    """
    An officer keeps every applicant capability and may also handle projects.
    """
    role = Role.OFFICER


class HDBManager(User):
    role = Role.MANAGER


class BTOProject:
    def __init__(self, project_id, project_name, neighborhood, flat_types,
                 open_date, close_date, manager, officerSlot, visibility=True):
        self.projectID = project_id
        self.projectName = project_name
        self.neighborhood = neighborhood
        # {FlatType: {"units": remaining units, "price": selling price}}
        self.flatTypes = flat_types
        self.applicationOpenDate = open_date
        self.applicationCloseDate = close_date
        self.manager = manager
        self.officers = []
        self.visibility = visibility
        self.officerSlot = officerSlot

    def offers(self, flat_type):
        return flat_type in self.flatTypes

    def availableUnits(self, flat_type):
        return self.flatTypes.get(flat_type, {}).get("units", 0)

    def priceOf(self, flat_type):
        return self.flatTypes.get(flat_type, {}).get("price", 0)

    def totalAvailableUnits(self):
        return sum(info["units"] for info in self.flatTypes.values())

    def reduceUnits(self, flat_type, num=1):
        if flat_type in self.flatTypes:
            self.flatTypes[flat_type]["units"] -= num
            if self.flatTypes[flat_type]["units"] < 0:
                self.flatTypes[flat_type]["units"] = 0

    def restoreUnits(self, flat_type, num=1):
        if flat_type in self.flatTypes:
            self.flatTypes[flat_type]["units"] += num

    def remainingOfficerSlots(self):
        return max(self.officerSlot - len(self.officers), 0)

    def isOpen(self, today):
        if not (self.applicationOpenDate and self.applicationCloseDate):
            return True
        return self.applicationOpenDate <= today <= self.applicationCloseDate

    def __repr__(self):
        return f"BTOProject({self.projectID!r}, {self.projectName!r})"


class Application:
    """
    BTO Application linking Applicant to Project
    """
    def __init__(self, application_id, applicant, project, chosen_flat_type,
                 status=ApplicationStatus.PENDING, application_date=None, status_update_date=None):
        self.applicationID = application_id
        self.applicant = applicant
        self.project = project
        self.chosen_flat_type = chosen_flat_type
        self.applicationStatus = status
        self.applicationDate = application_date or datetime.date.today()
        self.statusUpdateDate = status_update_date or self.applicationDate

    def updateStatus(self, new_status, today=None):
        self.applicationStatus = new_status
        self.statusUpdateDate = today or datetime.date.today()

    def isActive(self):
        return self.applicationStatus in ACTIVE_STATUSES

    def __repr__(self):
        return f"Application({self.applicationID!r}, {self.applicationStatus.value})"


class Registration:
    """
    An officer's request to handle a project.
    """
    def __init__(self, registration_id, officer, project,
                 status=RegistrationStatus.PENDING, registration_date=None):
        self.registrationID = registration_id
        self.officer = officer
        self.project = project
        self.status = status
        self.registrationDate = registration_date or datetime.date.today()

    def isLive(self):
        return self.status in (RegistrationStatus.PENDING, RegistrationStatus.APPROVED)


class Enquiry:
    """
    Enquiry from Applicant about a project.
    """
    def __init__(self, enquiry_id, applicant, project, message, submission_date=None):
        self.enquiryID = enquiry_id
        self.applicant = applicant
        self.project = project
        self.message = message
        self.submissionDate = submission_date or datetime.date.today()
        self.response = None
        self.respondedBy = None
        self.responseDate = None

    def reply(self, response, responder, today=None):
        self.response = response
        self.respondedBy = responder
        self.responseDate = today or datetime.date.today()

    def isReplied(self):
        return bool(self.response)


class WithdrawalRequest:
    def __init__(self, application, request_date=None, status=RequestStatus.PENDING,
                 processed_date=None, processed_by=None):
        self.application = application
        self.requestDate = request_date or datetime.date.today()
        self.status = status
        self.processedDate = processed_date
        self.processedBy = processed_by

    def isPending(self):
        return self.status == RequestStatus.PENDING


class Receipt:
    """
    Booking receipt issued by the officer who booked the flat.
    """
    def __init__(self, receipt_id, application, officer, generation_date=None):
        self.receiptID = receipt_id
        self.application = application
        self.officer = officer
        self.generationDate = generation_date or datetime.date.today()

    def render(self):
        app = self.application
        applicant = app.applicant
        project = app.project
        lines = [
            "======== FLAT BOOKING RECEIPT ========",
            f"Receipt ID: {self.receiptID}",
            f"Applicant Name: {applicant.name}",
            f"NRIC: {applicant.userID}",
            f"Age: {applicant.age}",
            f"Marital Status: {applicant.marital_status}",
            f"Project Name: {project.projectName}",
            f"Neighborhood: {project.neighborhood}",
            f"Flat Type Booked: {app.chosen_flat_type}",
            f"Price: ${project.priceOf(app.chosen_flat_type):,}",
            f"Issued by: {self.officer.name if self.officer else '-'} on {self.generationDate}",
            "======================================",
        ]
        return "\n".join(lines)
