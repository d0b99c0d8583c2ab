"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags contention   # Many buyers, one row
  locust -f locustfile.py --tags browse       # Catalog and availability reads
  locust -f locustfile.py --tags edge         # Test bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from datetime import datetime, timedelta, timezone

from locust import HttpUser, between, events, tag, task

# Shared state
EVENT_IDS = []
CONTENTION_TARGET = {}


def random_customer():
    name = "".join(random.choices(string.ascii_lowercase, k=8))
    return {"name": name, "email": f"{name}@load.test.io"}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: Contention users create a one-row event on first start")
    print("=" * 60)


class ContentionUser(HttpUser):
    """
    TEST 1: Contention - 100 users -> one row of 10 seats

    Run: locust -f locustfile.py --tags contention -u 100 -r 50 --run-time 30s

    After test, verify:
      GET /api/v1/events/{id}/availability
    booked_seats must be <= 10 and available + booked == 10
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        if CONTENTION_TARGET:
            return
        future = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
        resp = self.client.post("/api/v1/events/", json={
            "title": "Contention Test Event",
            "description": "One row, 10 seats",
            "date": future,
            "venue": "Test",
            "sections": [{"name": "Floor", "price": 50, "rows": [{"name": "A", "seat_count": 10}]}],
        })
        if resp.status_code == 201 and not CONTENTION_TARGET:
            data = resp.json()
            section = data["sections"][0]
            CONTENTION_TARGET.update(
                event_id=data["id"],
                section_id=section["id"],
                row_id=section["rows"][0]["id"],
            )
            print(f"\n✓ Created event {data['id']} with 10 seats\n")

    @tag("contention")
    @task
    def book_same_row(self):
        """All users fight for the same row."""
        if not CONTENTION_TARGET:
            return

        with self.client.post(
            f"/api/v1/events/{CONTENTION_TARGET['event_id']}/purchase",
            json={
                "section_id": CONTENTION_TARGET["section_id"],
                "row_id": CONTENTION_TARGET["row_id"],
                "ticket_count": random.randint(1, 2),
                "customer": random_customer(),
            },
            name="/api/v1/events/{id}/purchase [contention]",
            catch_response=True,
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            elif resp.status_code == 400 and resp.json().get("error_code") in (
                "CONTENTION",
                "INSUFFICIENT_INVENTORY",
            ):
                resp.success()  # Expected: row busy or sold out
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class BrowseUser(HttpUser):
    """
    TEST 2: Read throughput - catalog and live availability

    Run: locust -f locustfile.py --tags browse -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    @tag("browse")
    @task(5)
    def list_events(self):
        resp = self.client.get("/api/v1/events/")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("browse")
    @task(10)
    def availability(self):
        if EVENT_IDS:
            event_id = random.choice(EVENT_IDS)
            self.client.get(f"/api/v1/events/{event_id}/availability",
                name="/api/v1/events/{id}/availability")

    @tag("browse")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_event(self):
        with self.client.post("/api/v1/events/999999/purchase",
            json={"section_id": "x", "row_id": "y", "ticket_count": 1, "customer": random_customer()},
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def zero_tickets(self):
        with self.client.post("/api/v1/events/999999/purchase",
            json={"section_id": "x", "row_id": "y", "ticket_count": 0, "customer": random_customer()},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def too_many_tickets(self):
        with self.client.post("/api/v1/events/999999/purchase",
            json={"section_id": "x", "row_id": "y", "ticket_count": 50, "customer": random_customer()},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_customer(self):
        with self.client.post("/api/v1/events/999999/purchase",
            json={"section_id": "x", "row_id": "y", "ticket_count": 1},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/events/999999/purchase",
            data="not json at all",
            headers={"Content-Type": "application/json"},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def event_missing_venue(self):
        with self.client.post("/api/v1/events/",
            json={"title": "No venue", "date": "2026-01-01T00:00:00Z"},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])
