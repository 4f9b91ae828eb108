import os
import random

from locust import HttpUser, between, task


class InterviewApiUser(HttpUser):
    wait_time = between(1, 5)
    interview_ids = None

    def on_start(self):
        self.client.auth = (
            os.environ.get("LOCUST_USERNAME", "loadtest"),
            os.environ.get("LOCUST_PASSWORD", "loadtest-password"),
        )
        self.interview_ids = []

    @task(3)
    def create_interview(self):
        payload = {
            "company_name": random.choice(["Acme Corp", "Globex", "Initech"]),
            "job_position": "Software Engineer",
            "interviewer_name": "Load Tester",
            "interview_date": f"2024-{random.randint(1, 12):02d}-{random.randint(1, 28):02d}",
            "priority_level": random.choice(["High", "Medium", "Low"]),
        }
        response = self.client.post("/api/interviews/", json=payload)
        if response.status_code == 201:
            self.interview_ids.append(response.json()["id"])

    @task(5)
    def dashboard(self):
        self.client.get("/api/dashboard/")

    @task(5)
    def list_interviews(self):
        self.client.get("/api/interviews/", params={"search": "acme", "status": "Pending"})

    @task(2)
    def update_interview(self):
        if self.interview_ids:
            interview_id = random.choice(self.interview_ids)
            self.client.patch(
                f"/api/interviews/{interview_id}/",
                json={"status": random.choice(["Passed", "Failed", "No Feedback"])},
                name="/api/interviews/[id]/",
            )

    @task(1)
    def delete_interview(self):
        if self.interview_ids:
            interview_id = self.interview_ids.pop()
            self.client.delete(f"/api/interviews/{interview_id}/", name="/api/interviews/[id]/")
