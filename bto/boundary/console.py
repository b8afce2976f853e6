"""
Console helpers shared by the menus: prompts that re-ask on bad input,
list pickers and the project listing.
"""

import sys
from enum import Enum

from bto.control.project import SORT_KEYS
from bto.entities import FlatType
from bto.errors import BTOError, InvalidInputError
from bto.logging_config import get_logger
from bto.validation import normalize_nric, parse_date, parse_int

logger = get_logger(__name__)


class MenuResult(Enum):
    SIGN_OUT = "sign-out"
    SWITCH_ROLE = "switch-role"


def clear_screen():
    if sys.stdout.isatty():
        print("\033[2J\033[H", end="")


def prompt(message):
    return input(message).strip()


def prompt_int(message, field="number", minimum=None, maximum=None, allow_blank=False):
    """Ask until a whole number in range is entered; blank returns None when allowed."""
    while True:
        text = prompt(message)
        if allow_blank and text == "":
            return None
        try:
            return parse_int(text, field, minimum, maximum)
        except InvalidInputError as e:
            print(e)


def prompt_nric(message="Enter NRIC: "):
    while True:
        try:
            return normalize_nric(prompt(message))
        except InvalidInputError as e:
            print(e)


def prompt_date(message, allow_blank=False):
    while True:
        text = prompt(message)
        if allow_blank and text == "":
            return None
        value = parse_date(text)
        if value is not None:
            return value
        print("Invalid date. Please use YYYY-MM-DD.")


def prompt_text(message, allow_blank=False):
    while True:
        text = prompt(message)
        if text or allow_blank:
            return text
        print("Input cannot be empty.")


def prompt_label(message, label_enum, allow_blank=False):
    """Ask until the answer names a member of label_enum; blank returns None when allowed."""
    while True:
        text = prompt(message)
        if allow_blank and text == "":
            return None
        try:
            return label_enum.parse(text)
        except InvalidInputError as e:
            print(e)


def confirm(message):
    """Approve/Reject style question: ask until the answer is '1' (yes) or '0' (no)."""
    while True:
        answer = prompt(f"{message} (1 for Yes, 0 for No): ")
        if answer in ("1", "0"):
            return answer == "1"
        print("Please enter 1 for Yes or 0 for No.")


def choose(items, describe, heading, empty_message="Nothing to show."):
    """Print a numbered list and return the picked item, or None for 0/back."""
    if not items:
        print(empty_message)
        return None
    print(heading)
    for i, item in enumerate(items, start=1):
        print(f"{i}. {describe(item)}")
    idx = prompt_int("Select (0 to go back): ", "choice", 0, len(items))
    if idx == 0:
        return None
    return items[idx - 1]


def display_project(p, show_admin=False):
    line = f"[{p.projectID}] {p.projectName} | Neighborhood: {p.neighborhood}"
    if show_admin:
        manager = p.manager.name if p.manager else "-"
        line += f" | Visible: {p.visibility} | Manager: {manager}"
    print(line)
    if p.applicationOpenDate and p.applicationCloseDate:
        print(f"   Application Period: {p.applicationOpenDate} to {p.applicationCloseDate}")
    for ft, info in p.flatTypes.items():
        print(f"   {ft}: {info['units']} units, Price: ${info['price']:,}")
    if show_admin:
        officers = ", ".join(o.name for o in p.officers) or "none"
        print(f"   Officers ({len(p.officers)}/{p.officerSlot}): {officers}")
    print()


def run_action(action):
    """Run one menu action, reporting rule violations instead of raising."""
    try:
        return action()
    except BTOError as e:
        logger.debug("Action refused: %s", e)
        print(f"Error: {e}")
        return None


class Menu:
    """
    Numbered text menu. Subclasses fill in title and options(); a handler
    may return a MenuResult to leave the menu.
    """
    title = "Menu"

    def __init__(self, session):
        self.session = session
        self.user = session.user

    def options(self):
        return []

    def show(self):
        while True:
            options = self.options()
            print(f"\n{self.title} ({self.user.name})")
            for i, (label, _) in enumerate(options, start=1):
                print(f"{i}. {label}")
            print("0. Sign Out")
            choice = prompt("Choice: ")
            if choice == "0":
                return MenuResult.SIGN_OUT
            try:
                index = parse_int(choice, "choice", 1, len(options))
            except InvalidInputError:
                print("Invalid choice.")
                continue
            _, handler = options[index - 1]
            result = run_action(handler)
            self.session.save()
            if isinstance(result, MenuResult):
                return result

    # shared by every role

    def viewProfile(self):
        u = self.user
        print("==== My Profile ====")
        print(f"Name: {u.name}")
        print(f"NRIC: {u.userID}")
        print(f"Age: {u.age}")
        print(f"Marital Status: {u.marital_status}")
        print(f"Role: {u.role}")

    def changePassword(self):
        old = prompt("Current password: ")
        new = prompt("New password: ")
        if prompt("Confirm new password: ") != new:
            print("Passwords do not match.")
            return None
        self.session.users.changePassword(self.user, old, new)
        print("Password changed successfully. Please log in again.")
        return MenuResult.SIGN_OUT

    def setProjectFilters(self):
        f = self.session.project_filter
        print(f"Current filters: {f.describe()}")
        f.neighborhood = prompt("Neighborhood (blank for any): ") or None
        f.flat_type = prompt_label("Flat type (2 or 3, blank for any): ", FlatType, allow_blank=True)
        print("Sort by: 1. Name  2. Neighborhood  3. Closing date  4. Availability")
        sort_choice = prompt_int("Choice (blank for name): ", "choice", 1, 4, allow_blank=True)
        f.sort_by = SORT_KEYS[(sort_choice or 1) - 1]
        print(f"Filters set: {f.describe()}")
