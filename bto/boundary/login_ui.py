from bto.boundary.console import prompt, prompt_nric
from bto.errors import AuthenticationError


class LoginUI:
    def __init__(self, session):
        self.session = session

    def login(self):
        nric = prompt_nric("Enter NRIC: ")
        pw = prompt("Enter Password: ")
        try:
            return self.session.users.login(nric, pw)
        except AuthenticationError as e:
            print(f"Login failed: {e}")
            return None

    def show(self):
        """Loop until someone logs in; None means the user chose to exit."""
        while True:
            print("\n1. Login")
            print("0. Exit")
            choice = prompt("Choice: ")
            if choice == "1":
                user = self.login()
                if user:
                    return user
            elif choice == "0":
                return None
            else:
                print("Invalid choice.")
