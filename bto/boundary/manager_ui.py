from bto.boundary.applicant_ui import describe_application
from bto.boundary.console import (
    Menu, choose, confirm, display_project, prompt, prompt_date, prompt_int, prompt_label,
    prompt_text,
)
from bto.control.project import defaultFlatTypes
from bto.control.report import ReportCriteria
from bto.entities import FlatType, MaritalStatus


class ManagerMenu(Menu):
    title = "HDB Manager Menu"

    def options(self):
        return [
            ("View All Projects", self.viewAllProjects),
            ("View My Projects", self.viewMyProjects),
            ("Filter and Sort Projects", self.setProjectFilters),
            ("Create BTO Project", self.createProject),
            ("Edit BTO Project", self.editProject),
            ("Delete BTO Project", self.deleteProject),
            ("Toggle Project Visibility", self.toggleVisibility),
            ("Approve/Reject Officer Registration", self.processRegistrations),
            ("Approve/Reject Application", self.processApplications),
            ("Approve/Reject Withdrawal Request", self.processWithdrawals),
            ("Generate Applicant Report (Booked)", self.generateReport),
            ("View All Enquiries", self.viewAllEnquiries),
            ("Reply to an Enquiry", self.replyEnquiry),
            ("View My Profile", self.viewProfile),
            ("Change Password", self.changePassword),
        ]

    def _myProjects(self):
        return self.session.project_filter.apply(self.session.projects.projectsByManager(self.user))

    def _pickMyProject(self, heading):
        return choose(self._myProjects(), lambda p: f"[{p.projectID}] {p.projectName}", heading,
                      "You are not in charge of any project.")

    def viewAllProjects(self):
        projects = self.session.projects.visibleProjectsFor(self.user, self.session.project_filter)
        if not projects:
            print("No projects match the current filters.")
            return
        print(f"==== All Projects ({self.session.project_filter.describe()}) ====")
        for p in projects:
            display_project(p, show_admin=True)

    def viewMyProjects(self):
        projects = self._myProjects()
        if not projects:
            print("You are not in charge of any project.")
            return
        print("==== My Projects ====")
        for p in projects:
            display_project(p, show_admin=True)

    def createProject(self):
        name = prompt_text("Project name: ")
        neighborhood = prompt_text("Neighborhood: ")
        t1_units = prompt_int("Number of 2-Room units: ", "units", 0)
        t1_price = prompt_int("Selling price for 2-Room: ", "price", 0)
        t2_units = prompt_int("Number of 3-Room units: ", "units", 0)
        t2_price = prompt_int("Selling price for 3-Room: ", "price", 0)
        open_d = prompt_date("Open date (YYYY-MM-DD): ")
        close_d = prompt_date("Close date (YYYY-MM-DD): ")
        slot = prompt_int(f"Officer slots (max {self.session.projects.max_officer_slots}): ", "officer slots",
                          1, self.session.projects.max_officer_slots)
        project = self.session.projects.createProject(
            self.user, name, neighborhood, defaultFlatTypes(t1_units, t1_price, t2_units, t2_price),
            open_d, close_d, slot,
        )
        print(f"Project '{project.projectName}' created with ID {project.projectID}.")

    def editProject(self):
        project = self._pickMyProject("Select a project to edit:")
        if project is None:
            return
        print("Leave a field blank to keep its current value.")
        new_name = prompt(f"New project name [{project.projectName}]: ")
        new_nbhd = prompt(f"New neighborhood [{project.neighborhood}]: ")
        flat_types = {ft: dict(info) for ft, info in project.flatTypes.items()}
        for ft, info in flat_types.items():
            units = prompt_int(f"{ft} units [{info['units']}]: ", "units", 0, allow_blank=True)
            price = prompt_int(f"{ft} price [{info['price']}]: ", "price", 0, allow_blank=True)
            if units is not None:
                info["units"] = units
            if price is not None:
                info["price"] = price
        open_d = prompt_date(f"Open date [{project.applicationOpenDate}]: ", allow_blank=True)
        close_d = prompt_date(f"Close date [{project.applicationCloseDate}]: ", allow_blank=True)
        slot = prompt_int(f"Officer slots [{project.officerSlot}]: ", "officer slots", 1,
                          self.session.projects.max_officer_slots, allow_blank=True)
        self.session.projects.editProject(
            self.user, project,
            new_name=new_name or None,
            new_neighborhood=new_nbhd or None,
            new_flat_types=flat_types,
            new_open_date=open_d,
            new_close_date=close_d,
            new_slot=slot,
        )
        print(f"Project '{project.projectName}' updated successfully.")

    def deleteProject(self):
        project = self._pickMyProject("Select a project to delete:")
        if project is None:
            return
        if not confirm(f"Delete '{project.projectName}'?"):
            return
        self.session.projects.deleteProject(self.user, project)
        print("Project deleted.")

    def toggleVisibility(self):
        project = self._pickMyProject("Select a project to toggle:")
        if project is None:
            return
        visible = confirm(f"Make '{project.projectName}' visible? (currently {project.visibility})")
        self.session.projects.toggleVisibility(self.user, project, visible)
        print(f"Project '{project.projectName}' visibility set to {visible}.")

    def processRegistrations(self):
        reg = choose(self.session.registrations.pendingRegistrationsFor(self.user),
                     lambda r: f"Officer: {r.officer.name} ({r.officer.userID}), Project: {r.project.projectName} "
                               f"({r.project.remainingOfficerSlots()} slots left)",
                     "Pending Officer Registrations:", "No pending officer registrations.")
        if reg is None:
            return
        if confirm("Approve this registration?"):
            self.session.registrations.approveRegistration(self.user, reg)
            print(f"Officer {reg.officer.name} approved for '{reg.project.projectName}'.")
        else:
            self.session.registrations.rejectRegistration(self.user, reg)
            print(f"Officer {reg.officer.name} rejected for '{reg.project.projectName}'.")

    def processApplications(self):
        app = choose(self.session.applications.pendingApplicationsFor(self.user),
                     lambda a: f"Applicant: {a.applicant.name}, Age: {a.applicant.age}, "
                               f"{a.applicant.marital_status}, Project: {a.project.projectName}, "
                               f"Flat: {a.chosen_flat_type}",
                     "Pending Applications:", "No pending apps for your projects.")
        if app is None:
            return
        if confirm("Approve this application?"):
            self.session.applications.approveApplication(self.user, app, self.session.today())
            print(f"Application for {app.applicant.name} approved.")
        else:
            self.session.applications.rejectApplication(self.user, app, self.session.today())
            print(f"Application for {app.applicant.name} rejected.")

    def processWithdrawals(self):
        req = choose(self.session.withdrawals.pendingRequestsFor(self.user),
                     lambda w: f"{w.application.applicant.name}: {describe_application(w.application)} "
                               f"(requested {w.requestDate})",
                     "Withdrawal Requests:", "No withdrawal requests.")
        if req is None:
            return
        if confirm("Approve this withdrawal?"):
            self.session.withdrawals.approveWithdrawal(self.user, req, self.session.today())
            print("Withdrawal approved. Application set to 'Withdrawn'.")
        else:
            self.session.withdrawals.rejectWithdrawal(self.user, req, self.session.today())
            print("Withdrawal request rejected.")

    def generateReport(self):
        criteria = ReportCriteria()
        criteria.marital_status = prompt_label("Marital status (Single/Married, blank for all): ",
                                               MaritalStatus, allow_blank=True)
        criteria.flat_type = prompt_label("Flat type (2 or 3, blank for all): ", FlatType, allow_blank=True)
        criteria.neighborhood = prompt("Neighborhood (blank for all): ") or None
        criteria.min_age = prompt_int("Minimum age (blank for none): ", "age", 0, allow_blank=True)
        criteria.max_age = prompt_int("Maximum age (blank for none): ", "age", 0, allow_blank=True)
        if confirm("Only include my projects?"):
            booked = self.session.reports.bookingReport(criteria, manager=self.user)
        else:
            booked = self.session.reports.bookingReport(criteria)
        print(self.session.reports.formatReport(booked, criteria))
        for ft_key, count in self.session.reports.summarizeByFlatType(booked).items():
            print(f"   {ft_key}: {count}")

    def viewAllEnquiries(self):
        all_inqs = self.session.enquiries.allEnquiries()
        if not all_inqs:
            print("No enquiries.")
            return
        for i, enq in enumerate(all_inqs, start=1):
            print(f"{i}. [{enq.project.projectName}] From {enq.applicant.name}: {enq.message}")
            if enq.isReplied():
                print(f"   Response: {enq.response}")

    def replyEnquiry(self):
        enquiry = choose(
            self.session.enquiries.enquiriesToAnswer(self.user),
            lambda e: f"[{e.project.projectName}] From {e.applicant.name}: {e.message} (response: {e.response})",
            "Enquiries on my projects:", "No enquiries to reply to.",
        )
        if enquiry is None:
            return
        self.session.enquiries.replyEnquiry(self.user, enquiry, prompt_text("Enter reply: "), self.session.today())
        print("Replied successfully.")
