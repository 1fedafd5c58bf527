#!/usr/bin/env python3
"""
End-to-end smoke test for the CareLink booking API.

Runs against a live server seeded with ``manage.py populate_data`` and
reports every endpoint whose status code differs from the expected one.
Set ``CARELINK_BASE_URL`` to target another host.
"""
import json
import os
import sys
import time
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from typing import Any, Dict, Optional

import requests

BASE_URL = os.getenv("CARELINK_BASE_URL", "http://127.0.0.1:8000")

# Seeded by populate_data
ACCOUNTS = [
    {"email": "hospital1@carelink.test", "password": "123456", "licenseNumber": "LIC-1001"},
    {"email": "hospital2@carelink.test", "password": "123456", "licenseNumber": "LIC-1002"},
]


@dataclass
class TestResult:
    success: bool
    endpoint: str
    method: str
    status_code: int
    response_time: float
    error_message: str = ""
    description: str = ""


class SmokeTester:
    def __init__(self):
        self.session = requests.Session()
        self.results = []
        self.errors = []

    def call(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None,
             expected_status: int = 200, description: str = "") -> Optional[requests.Response]:
        url = f"{BASE_URL}{endpoint}"
        start = time.time()
        try:
            response = self.session.request(method, url, json=data)
        except requests.RequestException as e:
            result = TestResult(False, endpoint, method, 0, time.time() - start, str(e), description)
            print(f"❌ {method} {endpoint} - error: {e}")
            self.results.append(result)
            self.errors.append(result)
            return None

        elapsed = time.time() - start
        ok = response.status_code == expected_status
        result = TestResult(ok, endpoint, method, response.status_code, elapsed,
                            "" if ok else response.text[:200], description)
        self.results.append(result)
        if ok:
            print(f"✅ {method} {endpoint} - {response.status_code} ({elapsed:.2f}s)")
        else:
            print(f"❌ {method} {endpoint} - expected {expected_status}, got {response.status_code} ({elapsed:.2f}s)")
            self.errors.append(result)
        return response

    def login(self, account: Dict[str, str]) -> Optional[int]:
        self.session = requests.Session()
        r = self.call("POST", "/api/auth/login", account, 200, f"login {account['email']}")
        if r is None or r.status_code != 200:
            return None
        # Django's CSRF check applies to session-authenticated writes
        token = self.session.cookies.get("csrftoken")
        if token:
            self.session.headers["X-CSRFToken"] = token
        self.session.headers["Referer"] = BASE_URL
        return r.json()["user"]["hospitalId"]

    def run(self) -> bool:
        print("🏥 CareLink API smoke test")
        print("=" * 50)
        self.call("GET", "/healthz", None, 200, "health check")
        r = self.call("GET", "/api/hospital", None, 200, "hospital directory")
        hospitals = r.json() if r is not None and r.ok else []
        self.call("OPTIONS", "/api/hospital", None, 204, "directory pre-flight")
        if not hospitals:
            print("No hospitals found; run `manage.py populate_data` first.")
            return False

        hid = hospitals[0]["id"]
        booking = {
            "patient": "Smoke Test", "phone": "9000000000", "symptoms": "Routine check",
            "latitude": 22.57, "longitude": 88.36,
            "date": (date.today() + timedelta(days=3)).isoformat(), "time": "11:00 AM",
            "hospitalId": hid, "alert": ["none"],
        }
        created = self.call("POST", "/api/appointments", booking, 201, "book appointment")
        self.call("POST", "/api/appointments", {**booking, "latitude": None}, 400, "null latitude")
        self.call("POST", "/api/appointments", {**booking, "date": "not-a-date"}, 400, "bad date")
        self.call("POST", "/api/appointments", {**booking, "hospitalId": 10 ** 9}, 400, "unknown hospital")
        self.call("GET", f"/api/hospital/{hid}/appointments", None, 401, "list without session")

        own = self.login(ACCOUNTS[0])
        if own is not None:
            self.call("GET", f"/api/hospital/{own}/appointments", None, 200, "list own appointments")
            self.call("GET", "/api/auth/session", None, 200, "current session")
            if created is not None and created.status_code == 201 and own == hid:
                aid = created.json()["id"]
                self.call("DELETE", f"/api/hospital/{own}/appointments", None, 400, "delete without id")
                self.call("DELETE", f"/api/hospital/{own}/appointments/{aid}", None, 200, "delete own appointment")
            self.call("POST", "/api/auth/logout", {}, 200, "logout")

        other = self.login(ACCOUNTS[1])
        if other is not None and other != hid:
            self.call("GET", f"/api/hospital/{hid}/appointments", None, 401, "list other hospital")
            self.call("DELETE", f"/api/hospital/{hid}/appointments/1", None, 403, "delete under other hospital")
            self.call("POST", "/api/auth/logout", {}, 200, "logout")

        self.session = requests.Session()
        post = self.call("POST", "/api/community/submit",
                         {"name": "Smoke", "description": "Testing the board"}, 201, "community post")
        if post is not None and post.status_code == 201:
            self.call("POST", "/api/community/reply",
                      {"requestId": post.json()["id"], "name": "Bot", "message": "Reply"}, 201, "community reply")
        self.call("GET", "/api/community?page=1&limit=10", None, 200, "community list")

        self.report()
        return not self.errors

    def report(self):
        print("=" * 50)
        print(f"Total: {len(self.results)}  Passed: {len(self.results) - len(self.errors)}  Failed: {len(self.errors)}")
        if self.errors:
            stamp = time.strftime("%Y%m%d_%H%M%S")
            path = f"api_smoke_errors_{stamp}.json"
            with open(path, "w", encoding="utf-8") as f:
                json.dump([asdict(e) for e in self.errors], f, ensure_ascii=False, indent=2)
            print(f"Failure details written to {path}")


def main():
    sys.exit(0 if SmokeTester().run() else 1)


if __name__ == "__main__":
    main()
