"""Tests for the coordinator directory."""


class TestCoordinators:

    def test_create_and_list(self, client):
        resp = client.post("/api/coordinators/", json={"name": "Dr. Lima", "description": "Physics"})
        assert resp.status_code == 201
        assert resp.json()["name"] == "Dr. Lima"
        client.post("/api/coordinators/", json={"name": "Dr. Alves"})

        names = [c["name"] for c in client.get("/api/coordinators/").json()]
        assert names == ["Dr. Alves", "Dr. Lima"]

    def test_name_required(self, client):
        resp = client.post("/api/coordinators/", json={"description": "No name"})
        assert resp.status_code == 422
