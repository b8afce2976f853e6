from bto.boundary.console import (
    Menu, MenuResult, choose, confirm, display_project, prompt, prompt_text,
)
from bto.control.eligibility import eligibleFlatTypes
from bto.entities import Role


def describe_application(app):
    return (f"{app.applicationID} | Project: {app.project.projectName} "
            f"| Flat Type: {app.chosen_flat_type} | Status: {app.applicationStatus}")


def describe_enquiry(enq):
    reply = enq.response if enq.isReplied() else "None"
    return f"[{enq.project.projectName}] {enq.message} (Response: {reply})"


class ApplicantMenu(Menu):
    title = "Applicant Menu"

    def options(self):
        options = [
            ("View Available Projects", self.viewProjects),
            ("Filter and Sort Projects", self.setProjectFilters),
            ("Apply for a Project", self.applyForProject),
            ("View Application Status", self.viewApplicationStatus),
            ("Request Application Withdrawal", self.requestWithdrawal),
            ("Submit Enquiry", self.submitEnquiry),
            ("View My Enquiries", self.viewEnquiries),
            ("Edit an Enquiry", self.editEnquiry),
            ("Delete an Enquiry", self.deleteEnquiry),
            ("View My Profile", self.viewProfile),
            ("Change Password", self.changePassword),
        ]
        if self.user.role == Role.OFFICER:
            options.append(("Switch to HDB Officer view", lambda: MenuResult.SWITCH_ROLE))
        return options

    def _projects(self):
        return self.session.projects.visibleProjectsFor(self.user, self.session.project_filter, as_applicant=True)

    def viewProjects(self):
        types = eligibleFlatTypes(self.user)
        if not types:
            print("Based on your age and marital status, no projects are eligible.")
            return
        projects = self._projects()
        if not projects:
            print("No projects available based on your eligibility and current unit availability.")
            return
        print(f"==== Eligible Projects ({self.session.project_filter.describe()}) ====")
        print(f"You may apply for: {', '.join(str(t) for t in types)}")
        for p in projects:
            display_project(p)

    def applyForProject(self):
        project = choose(self._projects(), lambda p: f"{p.projectName} ({p.neighborhood})",
                         "Select a project to apply for:", "No projects available to apply for.")
        if project is None:
            return
        types = [t for t in eligibleFlatTypes(self.user) if project.availableUnits(t) > 0]
        flat_type = choose(types, str, "Select a flat type:", "No flat types available for you.")
        if flat_type is None:
            return
        app = self.session.applications.submitApplication(self.user, project, flat_type,
                                                          self.session.today())
        print(f"Application for '{project.projectName}' as {flat_type} submitted ({app.applicationStatus}).")

    def viewApplicationStatus(self):
        apps = self.session.applications.applicationsFor(self.user)
        if not apps:
            print("You have no applications.")
            return
        print("==== Your BTO Applications ====")
        for app in apps:
            line = f"- {describe_application(app)}"
            if self.session.withdrawals.hasPendingRequest(app):
                line += " (withdrawal requested)"
            print(line)

    def requestWithdrawal(self):
        active = self.session.applications.activeApplication(self.user)
        if active is None:
            print("No applications to withdraw.")
            return
        print(describe_application(active))
        if not confirm("Request withdrawal of this application?"):
            return
        self.session.withdrawals.requestWithdrawal(self.user, active, self.session.today())
        print("Withdrawal request submitted. Awaiting Manager's approval.")

    def submitEnquiry(self):
        projects = [p for p in self.session.projects.projects if p.visibility]
        project = choose(projects, lambda p: p.projectName, "Select the project:", "No projects to ask about.")
        if project is None:
            return
        message = prompt_text("Enter enquiry: ")
        self.session.enquiries.submitEnquiry(self.user, project, message, self.session.today())
        print("Enquiry submitted successfully.")

    def viewEnquiries(self):
        enquiries = self.session.enquiries.enquiriesBy(self.user)
        if not enquiries:
            print("You have no enquiries.")
            return
        print("==== Your Enquiries ====")
        for i, enq in enumerate(enquiries, start=1):
            print(f"{i}. [{enq.project.projectName}] {enq.message}")
            if enq.isReplied():
                print(f"   Response: {enq.response}")

    def _pickOwnEnquiry(self, heading):
        return choose(self.session.enquiries.enquiriesBy(self.user), describe_enquiry,
                      heading, "You have no enquiries.")

    def editEnquiry(self):
        enquiry = self._pickOwnEnquiry("Select an enquiry to edit:")
        if enquiry is None:
            return
        self.session.enquiries.editEnquiry(self.user, enquiry, prompt_text("New enquiry text: "))
        print("Enquiry updated.")

    def deleteEnquiry(self):
        enquiry = self._pickOwnEnquiry("Select an enquiry to delete:")
        if enquiry is None:
            return
        if prompt("Type 'yes' to confirm: ").lower() != "yes":
            print("Deletion cancelled.")
            return
        self.session.enquiries.deleteEnquiry(self.user, enquiry)
        print("Enquiry deleted.")
