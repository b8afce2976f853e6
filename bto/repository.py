"""
Repository layer: the in-memory DataStore and its CSV files.

load_* functions read one file each and resolve references against records
already loaded, so files are read in dependency order: users, projects,
registrations, applications, withdrawals, enquiries, receipts. Rows that
fail to parse are logged and skipped.
"""

import csv
import re

from bto import seed
from bto.entities import (
    Applicant, Application, ApplicationStatus, BTOProject, Enquiry, FlatType,
    HDBManager, HDBOfficer, MaritalStatus, Receipt, Registration,
    RegistrationStatus, RequestStatus, WithdrawalRequest,
)
from bto.errors import DataFileError
from bto.logging_config import get_logger
from bto.validation import format_date, parse_date

logger = get_logger(__name__)

APPLICANT_FILE = "ApplicantList.csv"
OFFICER_FILE = "OfficerList.csv"
MANAGER_FILE = "ManagerList.csv"
PROJECT_FILE = "ProjectList.csv"
APPLICATION_FILE = "ApplicationList.csv"
REGISTRATION_FILE = "OfficerRegistrations.csv"
WITHDRAWAL_FILE = "WithdrawalRequests.csv"
ENQUIRY_FILE = "EnquiryList.csv"
RECEIPT_FILE = "BookingReceipts.csv"

PROJECT_HEADER = [
    "ProjectID", "Project Name", "Neighborhood",
    "Type 1", "Number of units for Type 1", "Selling price for Type 1",
    "Type 2", "Number of units for Type 2", "Selling price for Type 2",
    "Application opening date", "Application closing date",
    "Manager", "Officer Slot", "Officer", "Visibility",
]
APPLICATION_HEADER = ["ApplicationID", "ApplicantNRIC", "ProjectID", "FlatType", "Status",
                      "ApplicationDate", "StatusUpdateDate"]
REGISTRATION_HEADER = ["RegistrationID", "OfficerNRIC", "ProjectID", "Status", "RegistrationDate"]
WITHDRAWAL_HEADER = ["ApplicationID", "RequestDate", "Status", "ProcessedDate", "ProcessedBy"]
ENQUIRY_HEADER = ["EnquiryID", "ApplicantNRIC", "ProjectID", "SubmissionDate", "Content",
                  "Reply", "RepliedBy", "ReplyDate"]
RECEIPT_HEADER = ["ReceiptID", "ApplicationID", "OfficerNRIC", "GenerationDate"]


class DataStore:
    """
    Every record of one session, shared by the controllers.
    """
    def __init__(self):
        self.applicants = []
        self.officers = []
        self.managers = []
        self.projects = []
        self.applications = []
        self.registrations = []
        self.withdrawals = []
        self.enquiries = []
        self.receipts = []

    @property
    def users(self):
        return self.managers + self.officers + self.applicants

    def findUser(self, nric):
        if not nric:
            return None
        nric = nric.strip().upper()
        for user in self.users:
            if user.userID.upper() == nric:
                return user
        return None

    def findProject(self, project_id):
        if not project_id:
            return None
        for p in self.projects:
            if p.projectID.upper() == project_id.strip().upper():
                return p
        return None

    def findApplication(self, application_id):
        for app in self.applications:
            if app.applicationID == application_id:
                return app
        return None

    def nextID(self, prefix, existing_ids, width=4):
        """Next sequential ID such as APP0007 for the given prefix."""
        highest = 0
        for existing in existing_ids:
            if existing and existing.startswith(prefix):
                digits = existing[len(prefix):]
                if digits.isascii() and digits.isdigit():
                    highest = max(highest, int(digits))
        return f"{prefix}{highest + 1:0{width}d}"


def _read_rows(path):
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return list(csv.DictReader(f))
    except OSError as e:
        raise DataFileError(f"Cannot read {path}: {e}") from e


def _write_rows(path, header, rows):
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
    except OSError as e:
        raise DataFileError(f"Cannot write {path}: {e}") from e


def _field(row, name):
    return (row.get(name) or "").strip()


def load_users(filename, user_class):
    """Load one user CSV (Name,NRIC,Age,Marital Status,Password) -> List[user_class]."""
    users = []
    for row in _read_rows(filename):
        try:
            users.append(user_class(
                _field(row, "NRIC").upper(),
                _field(row, "Password"),
                int(_field(row, "Age")),
                MaritalStatus.parse(_field(row, "Marital Status")),
                _field(row, "Name"),
            ))
        except (ValueError, KeyError) as e:
            logger.warning("Skipping user row in %s: %s", filename, e)
    logger.debug("Loaded %d %s records", len(users), user_class.__name__)
    return users


def _split_officers(officer_str):
    return [o.strip() for o in re.split(r"[;,]", officer_str) if o.strip()]


def load_projects(filename, manager_list, officer_list):
    projects = []
    for row in _read_rows(filename):
        try:
            flat_types = {}
            for n in ("1", "2"):
                label = _field(row, f"Type {n}")
                if not label:
                    continue
                flat_types[FlatType.parse(label)] = {
                    "units": int(_field(row, f"Number of units for Type {n}") or 0),
                    "price": int(_field(row, f"Selling price for Type {n}") or 0),
                }

            manager_str = _field(row, "Manager")
            manager_obj = None
            for m in manager_list:
                if m.name == manager_str or m.userID == manager_str.upper():
                    manager_obj = m
                    break
            if manager_obj is None:
                logger.warning("Project %s references unknown manager %r",
                               _field(row, "ProjectID"), manager_str)

            visibility = _field(row, "Visibility").lower() not in ("false", "0", "no", "off")
            project = BTOProject(
                _field(row, "ProjectID"),
                _field(row, "Project Name"),
                _field(row, "Neighborhood"),
                flat_types,
                parse_date(_field(row, "Application opening date")),
                parse_date(_field(row, "Application closing date")),
                manager_obj,
                int(_field(row, "Officer Slot") or _field(row, "Officer Slots") or 0),
                visibility,
            )
            for oname in _split_officers(_field(row, "Officer")):
                for off in officer_list:
                    if off.name == oname or off.userID == oname.upper():
                        project.officers.append(off)
                        break
            projects.append(project)
        except (ValueError, KeyError) as e:
            logger.warning("Skipping project row in %s: %s", filename, e)
    return projects


def load_registrations(filename, store):
    registrations = []
    for row in _read_rows(filename):
        try:
            officer = store.findUser(_field(row, "OfficerNRIC"))
            project = store.findProject(_field(row, "ProjectID"))
            if not isinstance(officer, HDBOfficer) or project is None:
                logger.warning("Skipping registration %s: unknown officer or project",
                               _field(row, "RegistrationID"))
                continue
            registrations.append(Registration(
                _field(row, "RegistrationID"),
                officer,
                project,
                RegistrationStatus.parse(_field(row, "Status")),
                parse_date(_field(row, "RegistrationDate")),
            ))
        except (ValueError, KeyError) as e:
            logger.warning("Skipping registration row in %s: %s", filename, e)
    return registrations


def load_applications(filename, store):
    applications = []
    for row in _read_rows(filename):
        try:
            applicant = store.findUser(_field(row, "ApplicantNRIC"))
            project = store.findProject(_field(row, "ProjectID"))
            if not isinstance(applicant, Applicant) or project is None:
                logger.warning("Skipping application %s: unknown applicant or project",
                               _field(row, "ApplicationID"))
                continue
            applications.append(Application(
                _field(row, "ApplicationID"),
                applicant,
                project,
                FlatType.parse(_field(row, "FlatType")),
                ApplicationStatus.parse(_field(row, "Status")),
                parse_date(_field(row, "ApplicationDate")),
                parse_date(_field(row, "StatusUpdateDate")),
            ))
        except (ValueError, KeyError) as e:
            logger.warning("Skipping application row in %s: %s", filename, e)
    return applications


def load_withdrawals(filename, store):
    requests = []
    for row in _read_rows(filename):
        try:
            application = store.findApplication(_field(row, "ApplicationID"))
            if application is None:
                logger.warning("Skipping withdrawal for unknown application %s",
                               _field(row, "ApplicationID"))
                continue
            requests.append(WithdrawalRequest(
                application,
                parse_date(_field(row, "RequestDate")),
                RequestStatus.parse(_field(row, "Status")),
                parse_date(_field(row, "ProcessedDate")),
                store.findUser(_field(row, "ProcessedBy")),
            ))
        except (ValueError, KeyError) as e:
            logger.warning("Skipping withdrawal row in %s: %s", filename, e)
    return requests


def load_enquiries(filename, store):
    enquiries = []
    for row in _read_rows(filename):
        try:
            applicant = store.findUser(_field(row, "ApplicantNRIC"))
            project = store.findProject(_field(row, "ProjectID"))
            if applicant is None or project is None:
                logger.warning("Skipping enquiry %s: unknown applicant or project",
                               _field(row, "EnquiryID"))
                continue
            enquiry = Enquiry(
                _field(row, "EnquiryID"),
                applicant,
                project,
                row.get("Content") or "",
                parse_date(_field(row, "SubmissionDate")),
            )
            if _field(row, "Reply"):
                enquiry.reply(row["Reply"], store.findUser(_field(row, "RepliedBy")),
                              parse_date(_field(row, "ReplyDate")))
            enquiries.append(enquiry)
        except (ValueError, KeyError) as e:
            logger.warning("Skipping enquiry row in %s: %s", filename, e)
    return enquiries


def load_receipts(filename, store):
    receipts = []
    for row in _read_rows(filename):
        application = store.findApplication(_field(row, "ApplicationID"))
        if application is None:
            logger.warning("Skipping receipt %s for unknown application", _field(row, "ReceiptID"))
            continue
        receipts.append(Receipt(
            _field(row, "ReceiptID"),
            application,
            store.findUser(_field(row, "OfficerNRIC")),
            parse_date(_field(row, "GenerationDate")),
        ))
    return receipts


def _user_rows(users):
    return [[u.name, u.userID, u.age, u.marital_status.value, u.password] for u in users]


def _project_row(p):
    row = [p.projectID, p.projectName, p.neighborhood]
    types = list(p.flatTypes.items())[:2]
    while len(types) < 2:
        types.append(None)
    for entry in types:
        if entry is None:
            row.extend(["", "", ""])
        else:
            ft, info = entry
            row.extend([ft.value, info["units"], info["price"]])
    row.extend([
        format_date(p.applicationOpenDate),
        format_date(p.applicationCloseDate),
        p.manager.userID if p.manager else "",
        p.officerSlot,
        ";".join(o.userID for o in p.officers),
        str(p.visibility),
    ])
    return row


class CsvRepository:
    """
    Reads and writes a DataStore as the CSV files in one directory.
    """
    def __init__(self, data_dir):
        self.data_dir = data_dir

    def path(self, filename):
        return self.data_dir / filename

    def seedDefaults(self):
        """Create any missing file, with sample records for users and projects."""
        defaults = {
            APPLICANT_FILE: (seed.USER_HEADER, seed.APPLICANTS),
            OFFICER_FILE: (seed.USER_HEADER, seed.OFFICERS),
            MANAGER_FILE: (seed.USER_HEADER, seed.MANAGERS),
            PROJECT_FILE: (PROJECT_HEADER, seed.PROJECTS),
            APPLICATION_FILE: (APPLICATION_HEADER, []),
            REGISTRATION_FILE: (REGISTRATION_HEADER, []),
            WITHDRAWAL_FILE: (WITHDRAWAL_HEADER, []),
            ENQUIRY_FILE: (ENQUIRY_HEADER, []),
            RECEIPT_FILE: (RECEIPT_HEADER, []),
        }
        for filename, (header, rows) in defaults.items():
            if not self.path(filename).exists():
                logger.info("Creating %s", self.path(filename))
                _write_rows(self.path(filename), header, rows)

    def _optional(self, filename):
        p = self.path(filename)
        return p if p.exists() else None

    def load(self):
        store = DataStore()
        store.applicants = load_users(self.path(APPLICANT_FILE), Applicant)
        store.officers = load_users(self.path(OFFICER_FILE), HDBOfficer)
        store.managers = load_users(self.path(MANAGER_FILE), HDBManager)
        store.projects = load_projects(self.path(PROJECT_FILE), store.managers, store.officers)

        loaders = [
            (REGISTRATION_FILE, load_registrations, "registrations"),
            (APPLICATION_FILE, load_applications, "applications"),
            (WITHDRAWAL_FILE, load_withdrawals, "withdrawals"),
            (ENQUIRY_FILE, load_enquiries, "enquiries"),
            (RECEIPT_FILE, load_receipts, "receipts"),
        ]
        for filename, loader, attr in loaders:
            path = self._optional(filename)
            if path is not None:
                setattr(store, attr, loader(path, store))

        self._syncOfficerAssignments(store)
        logger.info("Loaded %d users, %d projects, %d applications from %s",
                    len(store.users), len(store.projects), len(store.applications), self.data_dir)
        return store

    def _syncOfficerAssignments(self, store):
        # officers listed on a project count as approved registrations
        for project in store.projects:
            for officer in project.officers:
                if not any(r.officer is officer and r.project is project
                           and r.status == RegistrationStatus.APPROVED for r in store.registrations):
                    store.registrations.append(Registration(
                        store.nextID("REG", [r.registrationID for r in store.registrations]),
                        officer, project, RegistrationStatus.APPROVED,
                        project.applicationOpenDate,
                    ))
        for reg in store.registrations:
            if reg.status == RegistrationStatus.APPROVED and reg.officer not in reg.project.officers:
                reg.project.officers.append(reg.officer)

    def save(self, store):
        _write_rows(self.path(APPLICANT_FILE), seed.USER_HEADER, _user_rows(store.applicants))
        _write_rows(self.path(OFFICER_FILE), seed.USER_HEADER, _user_rows(store.officers))
        _write_rows(self.path(MANAGER_FILE), seed.USER_HEADER, _user_rows(store.managers))
        _write_rows(self.path(PROJECT_FILE), PROJECT_HEADER, [_project_row(p) for p in store.projects])
        _write_rows(self.path(APPLICATION_FILE), APPLICATION_HEADER, [
            [a.applicationID, a.applicant.userID, a.project.projectID, a.chosen_flat_type.value,
             a.applicationStatus.value, format_date(a.applicationDate), format_date(a.statusUpdateDate)]
            for a in store.applications
        ])
        _write_rows(self.path(REGISTRATION_FILE), REGISTRATION_HEADER, [
            [r.registrationID, r.officer.userID, r.project.projectID, r.status.value,
             format_date(r.registrationDate)]
            for r in store.registrations
        ])
        _write_rows(self.path(WITHDRAWAL_FILE), WITHDRAWAL_HEADER, [
            [w.application.applicationID, format_date(w.requestDate), w.status.value,
             format_date(w.processedDate), w.processedBy.userID if w.processedBy else ""]
            for w in store.withdrawals
        ])
        _write_rows(self.path(ENQUIRY_FILE), ENQUIRY_HEADER, [
            [e.enquiryID, e.applicant.userID, e.project.projectID, format_date(e.submissionDate),
             e.message, e.response or "", e.respondedBy.userID if e.respondedBy else "",
             format_date(e.responseDate)]
            for e in store.enquiries
        ])
        _write_rows(self.path(RECEIPT_FILE), RECEIPT_HEADER, [
            [r.receiptID, r.application.applicationID, r.officer.userID if r.officer else "",
             format_date(r.generationDate)]
            for r in store.receipts
        ])
        logger.debug("Saved data files to %s", self.data_dir)
