from bto.entities import HDBOfficer
from bto.errors import AuthenticationError, InvalidInputError
from bto.logging_config import get_logger
from bto.validation import normalize_nric

logger = get_logger(__name__)


class UserController:
    def __init__(self, store):
        self.store = store

    def findUserByNRIC(self, nric):
        return self.store.findUser(nric)

    def isOfficer(self, nric):
        return isinstance(self.store.findUser(nric), HDBOfficer)

    def login(self, nric, password):
        nric = normalize_nric(nric)
        user = self.store.findUser(nric)
        if user is None:
            logger.info("Login failed for unknown NRIC %s", nric)
            raise AuthenticationError("No user found with that NRIC.")
        if user.password != password:
            logger.info("Login failed for %s: wrong password", nric)
            raise AuthenticationError("Incorrect password.")
        logger.info("%s logged in as %s", nric, user.role.value)
        return user

    def changePassword(self, user, old_password, new_password):
        if user.password != old_password:
            raise AuthenticationError("Current password is incorrect.")
        if not new_password or not new_password.strip():
            raise InvalidInputError("New password cannot be empty.")
        if new_password == old_password:
            raise InvalidInputError("New password must differ from the current one.")
        user.password = new_password
        logger.info("Password changed for %s", user.userID)
