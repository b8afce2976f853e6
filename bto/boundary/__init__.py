"""Text menus for each role."""

from bto.boundary.applicant_ui import ApplicantMenu
from bto.boundary.console import MenuResult
from bto.boundary.login_ui import LoginUI
from bto.boundary.manager_ui import ManagerMenu
from bto.boundary.officer_ui import OfficerMenu

__all__ = ["ApplicantMenu", "LoginUI", "ManagerMenu", "MenuResult", "OfficerMenu"]
