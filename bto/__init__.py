"""HDB BTO Application System.

Console application for Build-To-Order housing: applicants apply for
projects, HDB officers handle registrations and bookings, HDB managers
create projects and approve applications. State lives in CSV files.
"""

__version__ = "1.0.0"
