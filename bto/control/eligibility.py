"""
Age and marital-status rules for BTO applications.

Singles (35 years and above) can ONLY apply for 2-Room.
Married (21 years and above) can apply for 2-Room or 3-Room.
"""

from bto.entities import FlatType
from bto.errors import EligibilityError

SINGLE_MIN_AGE = 35
MARRIED_MIN_AGE = 21


def eligibleFlatTypes(user):
    if user.isSingle():
        return [FlatType.TWO_ROOM] if user.age >= SINGLE_MIN_AGE else []
    if user.isMarried():
        return [FlatType.TWO_ROOM, FlatType.THREE_ROOM] if user.age >= MARRIED_MIN_AGE else []
    return []


def checkEligibility(user, flat_type):
    if user.isSingle():
        if user.age < SINGLE_MIN_AGE:
            raise EligibilityError(f"Single applicants must be at least {SINGLE_MIN_AGE} years old.")
        if flat_type != FlatType.TWO_ROOM:
            raise EligibilityError("Single applicants can ONLY apply for 2-Room.")
        return
    if user.age < MARRIED_MIN_AGE:
        raise EligibilityError(f"Married applicants must be at least {MARRIED_MIN_AGE} years old.")
    if flat_type not in (FlatType.TWO_ROOM, FlatType.THREE_ROOM):
        raise EligibilityError("Married applicants can apply for 2-Room or 3-Room only.")


def isEligibleForProject(user, project):
    """True when the project still has units in a flat type the user may apply for."""
    return any(project.availableUnits(ft) > 0 for ft in eligibleFlatTypes(user))
