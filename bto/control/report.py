"""
Manager reports over booked applications.
"""

from collections import Counter

from bto.entities import ApplicationStatus


class ReportCriteria:
    """
    Filters for a booking report. Unset fields match everything.
    """
    def __init__(self, marital_status=None, flat_type=None, project=None,
                 neighborhood=None, min_age=None, max_age=None):
        self.marital_status = marital_status
        self.flat_type = flat_type
        self.project = project
        self.neighborhood = neighborhood
        self.min_age = min_age
        self.max_age = max_age

    def matches(self, application):
        applicant = application.applicant
        if self.marital_status and applicant.marital_status != self.marital_status:
            return False
        if self.flat_type and application.chosen_flat_type != self.flat_type:
            return False
        if self.project and application.project is not self.project:
            return False
        if self.neighborhood and application.project.neighborhood.lower() != self.neighborhood.lower():
            return False
        if self.min_age is not None and applicant.age < self.min_age:
            return False
        if self.max_age is not None and applicant.age > self.max_age:
            return False
        return True

    def __str__(self):
        parts = []
        if self.marital_status:
            parts.append(f"Marital Status: {self.marital_status}")
        if self.flat_type:
            parts.append(f"Flat Type: {self.flat_type}")
        if self.project:
            parts.append(f"Project: {self.project.projectName}")
        if self.neighborhood:
            parts.append(f"Neighborhood: {self.neighborhood}")
        if self.min_age is not None:
            parts.append(f"Min Age: {self.min_age}")
        if self.max_age is not None:
            parts.append(f"Max Age: {self.max_age}")
        return ", ".join(parts) if parts else "No filters"


class ReportController:
    def __init__(self, store):
        self.store = store

    def bookingReport(self, criteria=None, manager=None):
        """Booked applications matching the criteria, optionally limited to one manager's projects."""
        criteria = criteria or ReportCriteria()
        return [a for a in self.store.applications
                if a.applicationStatus == ApplicationStatus.BOOKED
                and (manager is None or a.project.manager is manager)
                and criteria.matches(a)]

    def summarizeByStatus(self, applications):
        counts = Counter(a.applicationStatus for a in applications)
        return {status: counts.get(status, 0) for status in ApplicationStatus}

    def summarizeByFlatType(self, applications):
        return dict(Counter(a.chosen_flat_type for a in applications))

    def summarizeByMaritalStatus(self, applications):
        return dict(Counter(a.applicant.marital_status for a in applications))

    def formatReport(self, applications, criteria=None):
        lines = ["=== Applicant Report (Booked Applications) ===",
                 f"Filters: {criteria or ReportCriteria()}"]
        if not applications:
            lines.append("No booked applications match these filters.")
        for app in applications:
            lines.append(f"Applicant: {app.applicant.name} ({app.applicant.userID}) | "
                         f"Age: {app.applicant.age} | Marital: {app.applicant.marital_status} | "
                         f"Project: {app.project.projectName} | Flat Type: {app.chosen_flat_type}")
        lines.append(f"Total: {len(applications)}")
        return "\n".join(lines)
