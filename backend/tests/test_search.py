from jobtolk.services import search_service
from jobtolk.services.coarse_filter import FetchFailure


class TestSearch:
    def _profile(self, client, **fields):
        body = {"user_id": fields.pop("user_id", fields.get("username", "u")),
                "onboarding_completed": True}
        body.update(fields)
        r = client.post("/api/v1/profiles", json=body)
        assert r.status_code == 201
        return r.json()

    def _job(self, client, employer_id, **fields):
        body = {"employer_id": employer_id, "job_type": "freelance"}
        body.update(fields)
        r = client.post("/api/v1/jobs", json=body)
        assert r.status_code == 201
        return r.json()

    def _seed_jobs(self, client):
        self._profile(client, username="acme", account_type="employer", company_name="Acme")
        self._job(client, "acme", title="React Developer", description="Build the web app")
        self._job(client, "acme", title="Node Developer", description="react developer wanted",
                  required_skills=["react"])
        self._job(client, "acme", title="Gardener", description="hedges")

    def test_search_jobs_ranked(self, client):
        self._seed_jobs(client)

        r = client.get("/api/v1/search/jobs?q=react developer")
        assert r.status_code == 200
        data = r.json()
        assert data["query"] == "react developer"
        assert data["kind"] == "jobs"
        assert data["error"] is None
        assert [(h["item"]["title"], h["score"]) for h in data["results"]] == [
            ("React Developer", 140),
            # title "developer" 20 + description 5 + 5 + skill word 15
            ("Node Developer", 45),
        ]
        assert data["total"] == 2
        assert data["results"][0]["item"]["employer"]["company_name"] == "Acme"

    def test_search_jobs_empty_query_returns_coarse_set(self, client):
        self._seed_jobs(client)

        r = client.get("/api/v1/search/jobs")
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 3
        assert all(h["score"] is None for h in data["results"])

    def test_search_no_match_returns_empty(self, client):
        self._seed_jobs(client)

        r = client.get("/api/v1/search/jobs?q=zzzzz_no_match")
        assert r.status_code == 200
        data = r.json()
        assert data["total"] == 0
        assert data["results"] == []
        assert data["error"] is None

    def test_search_freelancers_by_skill(self, client):
        self._profile(client, username="tsdev", full_name="Tess Script", skills=["TypeScript"])
        self._profile(client, username="pydev", full_name="Py Thon", skills=["Python"])

        r = client.get("/api/v1/search/freelancers?q=type&skills=typescript")
        assert r.status_code == 200
        data = r.json()
        # the coarse filter needs "type" in a text field, so only the skill filter applies here
        assert data["total"] == 0

        r = client.get("/api/v1/search/freelancers?skills=typescript")
        data = r.json()
        assert [h["item"]["username"] for h in data["results"]] == ["tsdev"]

    def test_search_freelancers_ranked(self, client):
        self._profile(client, username="ada", full_name="Ada Lovelace")
        self._profile(client, username="adam", full_name="Adam Smith", bio="ada fan")

        r = client.get("/api/v1/search/freelancers?q=ada")
        assert r.status_code == 200
        data = r.json()
        assert data["kind"] == "freelancers"
        assert [(h["item"]["username"], h["score"]) for h in data["results"]] == [
            ("ada", 145),
            # substring 50 + full_name 25 + username 20 + bio 5
            ("adam", 100),
        ]

    def test_search_freelancers_excludes_unfinished_onboarding(self, client):
        self._profile(client, username="ghost", full_name="Ghost", onboarding_completed=False)

        r = client.get("/api/v1/search/freelancers?q=ghost")
        assert r.json()["total"] == 0

    def test_invalid_service_type_rejected(self, client):
        r = client.get("/api/v1/search/freelancers?service_type=hybrid")
        assert r.status_code == 422

    def test_fetch_failure_reported_as_empty(self, client, monkeypatch):
        self._seed_jobs(client)

        def failing_fetch(db, filters, kind):
            raise FetchFailure("Could not fetch jobs")

        monkeypatch.setattr(search_service, "fetch_entities", failing_fetch)
        r = client.get("/api/v1/search/jobs?q=react")
        assert r.status_code == 200
        data = r.json()
        assert data["results"] == []
        assert data["error"] == "Could not fetch jobs"


class TestLiveSearch:
    def _seed(self, client):
        client.post("/api/v1/profiles", json={"user_id": "acme", "account_type": "employer"})
        client.post("/api/v1/jobs", json={
            "employer_id": "acme", "job_type": "remote", "title": "React Developer",
        })

    def test_burst_collapses_to_last_query(self, client):
        self._seed(client)
        with client.websocket_connect("/api/v1/search/live") as ws:
            for query in ("r", "re", "react"):
                ws.send_json({"kind": "jobs", "filters": {"query": query}})
            data = ws.receive_json()
            assert data["query"] == "react"
            assert [(h["item"]["title"], h["score"]) for h in data["results"]] == [
                ("React Developer", 70),
            ]

    def test_clear_returns_empty_results(self, client):
        self._seed(client)
        with client.websocket_connect("/api/v1/search/live") as ws:
            ws.send_json({"kind": "freelancers", "action": "clear"})
            data = ws.receive_json()
            assert data["kind"] == "freelancers"
            assert data["total"] == 0
            assert data["results"] == []

    def test_invalid_message(self, client):
        with client.websocket_connect("/api/v1/search/live") as ws:
            ws.send_json({"kind": "videos", "filters": {"query": "x"}})
            data = ws.receive_json()
            assert "Invalid search message" in data["error"]

    def test_non_object_message(self, client):
        with client.websocket_connect("/api/v1/search/live") as ws:
            ws.send_json(["not", "an", "object"])
            data = ws.receive_json()
            assert "Invalid search message" in data["error"]

            # the connection stays usable afterwards
            ws.send_json({"kind": "jobs", "action": "clear"})
            assert ws.receive_json()["total"] == 0

    def test_non_json_text(self, client):
        with client.websocket_connect("/api/v1/search/live") as ws:
            ws.send_text("react")
            data = ws.receive_json()
            assert "Invalid search message" in data["error"]

            ws.send_json({"kind": "jobs", "action": "clear"})
            assert ws.receive_json()["results"] == []
