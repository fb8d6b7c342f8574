import concurrent.futures

from fastapi.testclient import TestClient

from conftest import unique_email


class TestE2E:
    def test_complete_user_journey(self, client: TestClient):
        # 1. Registration
        r = client.post("/api/auth/register", json={
            "name": "Ana",
            "email": "ana@x.com",
            "password": "secret1",
        })
        assert r.status_code == 201

        # 2. Login
        r = client.post("/api/auth/login", json={"email": "ana@x.com", "password": "secret1"})
        assert r.status_code == 200
        body = r.json()
        assert body["user"]["name"] == "Ana"
        headers = {"Authorization": f"Bearer {body['token']}"}

        # 3. Create, toggle, delete
        r = client.post("/api/tasks", json={"title": "Buy milk"}, headers=headers)
        assert r.status_code == 201
        task = r.json()
        assert task["completed"] is False
        assert task["priority"] == "media"

        r = client.put(f"/api/tasks/{task['id']}/toggle", headers=headers)
        assert r.status_code == 200
        assert r.json()["completed"] is True

        r = client.delete(f"/api/tasks/{task['id']}", headers=headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Task deleted successfully"}

        # 4. Nothing left
        r = client.get("/api/tasks", headers=headers)
        assert r.status_code == 200
        assert r.json() == []

    def test_tasks_without_authorization_header(self, client: TestClient):
        r = client.get("/api/tasks")
        assert r.status_code == 401

    def test_toggle_unknown_task_with_valid_token(self, client: TestClient, register_and_login):
        headers, _ = register_and_login()

        r = client.put("/api/tasks/999/toggle", headers=headers)
        assert r.status_code == 404

    def test_two_users_isolation(self, client: TestClient, register_and_login):
        headers, _ = register_and_login()
        other_headers, _ = register_and_login()

        t1 = client.post("/api/tasks", json={"title": "task one"}, headers=headers).json()["id"]
        t2 = client.post("/api/tasks", json={"title": "task two"}, headers=headers).json()["id"]

        r = client.delete(f"/api/tasks/{t1}", headers=headers)
        assert r.status_code == 200

        titles = [t["title"] for t in client.get("/api/tasks", headers=headers).json()]
        assert titles == ["task two"]

        # guessing the id of someone else's task looks exactly like a missing one
        r = client.delete(f"/api/tasks/{t2}", headers=other_headers)
        assert r.status_code == 404
        assert client.get("/api/tasks", headers=other_headers).json() == []

    def test_concurrent_operations(self, client: TestClient, register_and_login):
        headers, user = register_and_login(email=unique_email("concurrent"))

        def create_task(i):
            return client.post("/api/tasks", json={"title": f"Concurrent Task {i}"}, headers=headers)

        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
            futures = [executor.submit(create_task, i) for i in range(5)]
            responses = [f.result() for f in futures]

        assert all(r.status_code == 201 for r in responses)

        tasks = client.get("/api/tasks", headers=headers).json()
        assert len(tasks) == 5
        assert len({t["title"] for t in tasks}) == 5
        assert all(t["user_id"] == user["id"] for t in tasks)
