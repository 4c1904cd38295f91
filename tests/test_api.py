"""API tests for /api/v1 roles, users, subordinates and health endpoints."""

import unittest

from fastapi.testclient import TestClient

from subordinates.core.config import settings
from subordinates.core.state import get_finder
from subordinates.main import app
from subordinates.services.finder import Finder

PREFIX = settings.API_V1_PREFIX

SAMPLE_ROLES = [
    {"id": 1, "name": "System Administrator", "parent": 0},
    {"id": 2, "name": "Location Manager", "parent": 1},
    {"id": 3, "name": "Supervisor", "parent": 2},
    {"id": 4, "name": "Employee", "parent": 3},
    {"id": 5, "name": "Trainer", "parent": 3},
]
SAMPLE_USERS = [
    {"id": 1, "name": "Adam Admin", "role": 1},
    {"id": 2, "name": "Emily Employee", "role": 4},
    {"id": 3, "name": "Sam Supervisor", "role": 3},
    {"id": 4, "name": "Mary Manager", "role": 2},
    {"id": 5, "name": "Steve Trainer", "role": 5},
]


class _ApiTestCase(unittest.TestCase):
    """Each test gets its own Finder through dependency_overrides."""

    def setUp(self) -> None:
        self.finder = Finder()
        app.dependency_overrides[get_finder] = lambda: self.finder
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def _load_sample(self) -> None:
        self.assertEqual(self.client.put(f"{PREFIX}/roles", json=SAMPLE_ROLES).status_code, 200)
        self.assertEqual(self.client.put(f"{PREFIX}/users", json=SAMPLE_USERS).status_code, 200)


class TestLoadEndpoints(_ApiTestCase):
    """PUT /roles and PUT /users replace the indexes."""

    def test_put_roles_returns_distinct_count(self) -> None:
        body = SAMPLE_ROLES + [{"id": 5, "name": "Trainer (renamed)", "parent": 3}]
        resp = self.client.put(f"{PREFIX}/roles", json=body)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"loaded": 5})
        self.assertEqual(self.finder.role_count, 5)

    def test_put_users(self) -> None:
        resp = self.client.put(f"{PREFIX}/users", json=SAMPLE_USERS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["loaded"], 5)
        self.assertEqual(self.finder.user_count, 5)

    def test_zero_role_id_rejected(self) -> None:
        resp = self.client.put(f"{PREFIX}/roles", json=[{"id": 0, "name": "bad"}])
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(self.finder.role_count, 0)

    def test_user_without_role_rejected(self) -> None:
        resp = self.client.put(f"{PREFIX}/users", json=[{"id": 1, "name": "x"}])
        self.assertEqual(resp.status_code, 422)

    def test_non_array_body_rejected(self) -> None:
        resp = self.client.put(f"{PREFIX}/roles", json={"id": 1})
        self.assertEqual(resp.status_code, 422)


class TestSubordinatesEndpoint(_ApiTestCase):
    """GET /users/{user_id}/subordinates maps finder results and errors to HTTP."""

    def test_supervisor(self) -> None:
        self._load_sample()
        resp = self.client.get(f"{PREFIX}/users/3/subordinates")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["user_id"], 3)
        self.assertEqual(data["count"], 2)
        self.assertEqual(
            data["subordinates"],
            [
                {"id": 2, "name": "Emily Employee", "role": 4},
                {"id": 5, "name": "Steve Trainer", "role": 5},
            ],
        )

    def test_admin(self) -> None:
        self._load_sample()
        data = self.client.get(f"{PREFIX}/users/1/subordinates").json()
        self.assertEqual({u["id"] for u in data["subordinates"]}, {2, 3, 4, 5})

    def test_leaf_user_empty(self) -> None:
        self._load_sample()
        data = self.client.get(f"{PREFIX}/users/2/subordinates").json()
        self.assertEqual(data["count"], 0)
        self.assertEqual(data["subordinates"], [])

    def test_unknown_user_404(self) -> None:
        self._load_sample()
        resp = self.client.get(f"{PREFIX}/users/99/subordinates")
        self.assertEqual(resp.status_code, 404)
        self.assertIn("99", resp.json()["detail"])

    def test_missing_role_409(self) -> None:
        self._load_sample()
        self.client.put(f"{PREFIX}/users", json=SAMPLE_USERS + [{"id": 6, "name": "Ghost", "role": 42}])
        resp = self.client.get(f"{PREFIX}/users/1/subordinates")
        self.assertEqual(resp.status_code, 409)
        self.assertIn("42", resp.json()["detail"])

    def test_cycle_409(self) -> None:
        self.client.put(
            f"{PREFIX}/roles",
            json=[{"id": 1, "parent": 0}, {"id": 2, "parent": 3}, {"id": 3, "parent": 2}],
        )
        self.client.put(f"{PREFIX}/users", json=[{"id": 1, "role": 1}, {"id": 2, "role": 2}])
        resp = self.client.get(f"{PREFIX}/users/1/subordinates")
        self.assertEqual(resp.status_code, 409)

    def test_replacing_roles_changes_answer(self) -> None:
        self._load_sample()
        self.client.put(f"{PREFIX}/roles", json=[{"id": r["id"], "parent": 0} for r in SAMPLE_ROLES])
        data = self.client.get(f"{PREFIX}/users/1/subordinates").json()
        self.assertEqual(data["subordinates"], [])

    def test_non_integer_user_id_422(self) -> None:
        resp = self.client.get(f"{PREFIX}/users/abc/subordinates")
        self.assertEqual(resp.status_code, 422)


class TestHealthEndpoint(_ApiTestCase):
    """GET /health/ reports index sizes."""

    def test_empty(self) -> None:
        resp = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["status"], "ok")
        self.assertEqual(data["roles_loaded"], 0)
        self.assertEqual(data["users_loaded"], 0)

    def test_after_load(self) -> None:
        self._load_sample()
        data = self.client.get(f"{PREFIX}/health/").json()
        self.assertEqual(data["roles_loaded"], 5)
        self.assertEqual(data["users_loaded"], 5)

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Subordinates API"})


if __name__ == "__main__":
    unittest.main()
