from bto.boundary.applicant_ui import describe_application
from bto.boundary.console import (
    Menu, MenuResult, choose, display_project, prompt_nric, prompt_text,
)
from bto.entities import ApplicationStatus


class OfficerMenu(Menu):
    title = "HDB Officer Menu"

    def options(self):
        return [
            ("View Projects I'm Handling", self.viewHandledProjects),
            ("Register to handle a Project", self.registerToProject),
            ("View My Officer Registrations", self.viewRegistrations),
            ("Retrieve an Application by NRIC", self.retrieveApplication),
            ("Book a Flat for a Successful Applicant", self.bookFlat),
            ("Generate Booking Receipt", self.generateReceipt),
            ("View & Reply to Enquiries", self.replyEnquiries),
            ("View My Profile", self.viewProfile),
            ("Change Password", self.changePassword),
            ("Switch to Applicant view", lambda: MenuResult.SWITCH_ROLE),
        ]

    def _handled(self):
        return self.session.registrations.handledProjects(self.user)

    def _pickHandledProject(self):
        projects = self._handled()
        if len(projects) == 1:
            return projects[0]
        return choose(projects, lambda p: p.projectName, "Select a project:",
                      "You are not handling any project currently.")

    def viewHandledProjects(self):
        projects = self._handled()
        if not projects:
            print("You are not handling any project currently.")
            return
        print("==== Projects I'm Handling ====")
        for p in projects:
            display_project(p, show_admin=True)

    def registerToProject(self):
        candidates = [p for p in self.session.projects.projects
                      if not self.session.registrations.isRegisteredFor(self.user, p)]
        project = choose(candidates, lambda p: f"{p.projectName} ({p.applicationOpenDate} to "
                                               f"{p.applicationCloseDate}, {p.remainingOfficerSlots()} slots left)",
                         "Select a project to handle:", "No projects available for registration.")
        if project is None:
            return
        self.session.registrations.registerOfficer(self.user, project, self.session.today())
        print(f"Registration to handle project '{project.projectName}' submitted (Pending).")

    def viewRegistrations(self):
        regs = self.session.registrations.registrationsFor(self.user)
        if not regs:
            print("You have no officer registrations.")
            return
        print("==== My Officer Registrations ====")
        for r in regs:
            print(f"- {r.project.projectName} | Status: {r.status} | Registered: {r.registrationDate}")

    def retrieveApplication(self):
        project = self._pickHandledProject()
        if project is None:
            return None
        app = self.session.applications.findApplicationByNRIC(prompt_nric("Enter Applicant NRIC: "), project)
        print(f"Found application: {app.applicant.name}, {describe_application(app)}")
        return app

    def bookFlat(self):
        project = self._pickHandledProject()
        if project is None:
            return
        successful = self.session.applications.applicationsForProject(project, ApplicationStatus.SUCCESSFUL)
        app = choose(successful, lambda a: f"{a.applicant.name} ({a.applicant.userID}) - {a.chosen_flat_type}",
                     "Successful applications awaiting booking:", "No successful applications to book.")
        if app is None:
            return
        receipt = self.session.applications.bookFlat(self.user, app, self.session.today())
        print(f"Flat booked. {project.availableUnits(app.chosen_flat_type)} {app.chosen_flat_type} units left.")
        print(receipt.render())

    def generateReceipt(self):
        project = self._pickHandledProject()
        if project is None:
            return
        app = self.session.applications.findApplicationByNRIC(prompt_nric("Enter Applicant NRIC: "), project)
        if app.applicationStatus != ApplicationStatus.BOOKED:
            print("No 'Booked' application found for this applicant.")
            return
        print(self.session.applications.receiptFor(app).render())

    def replyEnquiries(self):
        enquiries = self.session.enquiries.enquiriesToAnswer(self.user)
        enquiry = choose(
            enquiries,
            lambda e: f"[{e.project.projectName}] From {e.applicant.name}: {e.message} (response: {e.response})",
            "Enquiries on my projects:", "No enquiries for the projects you handle.",
        )
        if enquiry is None:
            return
        self.session.enquiries.replyEnquiry(self.user, enquiry, prompt_text("Enter reply: "), self.session.today())
        print("Replied successfully.")
