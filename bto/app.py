"""
Session loop: login, role dispatch, sign-out and switch-role.
"""

from bto.boundary import ApplicantMenu, LoginUI, ManagerMenu, MenuResult, OfficerMenu
from bto.boundary.console import clear_screen
from bto.entities import Role
from bto.errors import DataFileError
from bto.logging_config import configure_logging, get_logger
from bto.repository import CsvRepository
from bto.session import Session
from bto.settings import get_settings

logger = get_logger(__name__)

MENUS = {
    Role.APPLICANT: ApplicantMenu,
    Role.OFFICER: OfficerMenu,
    Role.MANAGER: ManagerMenu,
}


def check_menus(menus):
    """Fail at import when a role has no menu."""
    missing = [role.value for role in Role if role not in menus]
    if missing:
        raise RuntimeError(f"No menu for role(s): {', '.join(missing)}")


check_menus(MENUS)

SWITCHES = {
    Role.OFFICER: Role.APPLICANT,
    Role.APPLICANT: Role.OFFICER,
}


def run(session):
    """Serve users until someone chooses Exit at the login prompt."""
    login_ui = LoginUI(session)
    while True:
        user = login_ui.show()
        if user is None:
            break
        session.signIn(user)
        print(f"Welcome, {user.name} ({user.role})!")

        view = user.role
        while session.user is not None:
            result = MENUS[view](session).show()
            if result == MenuResult.SWITCH_ROLE and user.role == Role.OFFICER:
                view = SWITCHES[view]
                logger.info("%s switched to the %s view", user.userID, view.value)
            else:
                session.signOut()
    session.save()


def main():
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)

    clear_screen()
    print("=== HDB BTO Application System ===")

    repository = CsvRepository(settings.data_dir)
    try:
        if settings.seed_data:
            repository.seedDefaults()
        store = repository.load()
    except DataFileError as e:
        logger.error("Cannot load data: %s", e)
        print(f"Error initializing data: {e}")
        return 1

    session = Session(store, repository, settings.max_officer_slots)
    try:
        run(session)
    except (KeyboardInterrupt, EOFError):
        print()
        session.save()
    print("Thank you for using the BTO Management System. Goodbye!")
    return 0
