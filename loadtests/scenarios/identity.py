"""Account load test scenarios.

AccountLifecycleJourney walks a new shopper through signup, profile edits,
a password change and a fresh login.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import password, profile_data, signup_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class AccountLifecycleJourney(SequentialTaskSet):
    """Signup -> Me -> Update Profile -> Change Password -> Logout -> Login."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def signup(self):
        payload = signup_data()
        with self.client.post(
            "/api/auth/signup",
            json=payload,
            catch_response=True,
            name="POST /api/auth/signup",
        ) as resp:
            if resp.status_code == 201:
                self.state.email = payload["email"]
                self.state.password = payload["password"]
                self.state.user_id = resp.json()["id"]
                self.state.signed_in = True
            else:
                resp.failure(f"Signup failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def me(self):
        with self.client.get("/api/auth/me", catch_response=True, name="GET /api/auth/me") as resp:
            if resp.status_code != 200:
                resp.failure(f"Me failed: {resp.status_code}")

    @task
    def update_profile(self):
        with self.client.post(
            "/api/auth/update-profile",
            json=profile_data(),
            catch_response=True,
            name="POST /api/auth/update-profile",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update profile failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def change_password(self):
        new_password = password()
        with self.client.post(
            "/api/auth/change-password",
            json={"current_password": self.state.password, "new_password": new_password},
            catch_response=True,
            name="POST /api/auth/change-password",
        ) as resp:
            if resp.status_code == 200:
                self.state.password = new_password
            else:
                resp.failure(f"Change password failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def logout(self):
        self.client.post("/api/auth/logout", name="POST /api/auth/logout")
        self.state.signed_in = False

    @task
    def login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /api/auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.signed_in = True
            else:
                resp.failure(f"Login failed: {resp.status_code}: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class IdentityUser(HttpUser):
    wait_time = between(1.0, 3.0)
    tasks = [AccountLifecycleJourney]
