import datetime

from bto.entities import Enquiry, HDBManager, HDBOfficer
from bto.errors import ApplicationStateError, InvalidInputError, PermissionDeniedError
from bto.logging_config import get_logger

logger = get_logger(__name__)


class EnquiryController:
    def __init__(self, store):
        self.store = store

    def allEnquiries(self):
        return list(self.store.enquiries)

    def enquiriesBy(self, applicant):
        return [e for e in self.store.enquiries if e.applicant is applicant]

    def enquiriesForProject(self, project):
        return [e for e in self.store.enquiries if e.project is project]

    def enquiriesToAnswer(self, user):
        """Enquiries on the projects this officer handles or this manager runs."""
        if isinstance(user, HDBManager):
            return [e for e in self.store.enquiries if e.project.manager is user]
        if isinstance(user, HDBOfficer):
            return [e for e in self.store.enquiries if user in e.project.officers]
        return []

    def submitEnquiry(self, applicant, project, message, today=None):
        if not message or not message.strip():
            raise InvalidInputError("Enquiry cannot be empty.")
        enquiry = Enquiry(
            self.store.nextID("ENQ", [e.enquiryID for e in self.store.enquiries]),
            applicant, project, message.strip(), today or datetime.date.today(),
        )
        self.store.enquiries.append(enquiry)
        logger.info("Enquiry %s submitted by %s on %s", enquiry.enquiryID, applicant.userID, project.projectID)
        return enquiry

    def _requireEditable(self, applicant, enquiry):
        if enquiry.applicant is not applicant:
            raise PermissionDeniedError("You can only change your own enquiries.")
        if enquiry.isReplied():
            raise ApplicationStateError("This enquiry has been replied to and can no longer be changed.")

    def editEnquiry(self, applicant, enquiry, new_message):
        self._requireEditable(applicant, enquiry)
        if not new_message or not new_message.strip():
            raise InvalidInputError("Enquiry cannot be empty.")
        enquiry.message = new_message.strip()
        logger.info("Enquiry %s edited", enquiry.enquiryID)

    def deleteEnquiry(self, applicant, enquiry):
        self._requireEditable(applicant, enquiry)
        self.store.enquiries.remove(enquiry)
        logger.info("Enquiry %s deleted", enquiry.enquiryID)

    def replyEnquiry(self, user, enquiry, response, today=None):
        if enquiry not in self.enquiriesToAnswer(user):
            raise PermissionDeniedError("You can only reply to enquiries on projects you handle.")
        if not response or not response.strip():
            raise InvalidInputError("Reply cannot be empty.")
        enquiry.reply(response.strip(), user, today)
        logger.info("Enquiry %s replied by %s", enquiry.enquiryID, user.userID)
