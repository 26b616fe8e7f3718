class TestProfiles:
    def test_create_profile(self, client):
        r = client.post("/api/v1/profiles", json={
            "user_id": "user-1",
            "username": "ada",
            "full_name": "Ada Lovelace",
            "skills": ["Python", "Math"],
            "service_type": "remote",
        })
        assert r.status_code == 201
        data = r.json()
        assert data["username"] == "ada"
        assert data["skills"] == ["Python", "Math"]
        assert data["account_type"] == "freelancer"
        assert data["onboarding_completed"] is False

    def test_duplicate_user_rejected(self, client):
        client.post("/api/v1/profiles", json={"user_id": "user-1"})
        r = client.post("/api/v1/profiles", json={"user_id": "user-1"})
        assert r.status_code == 409

    def test_invalid_service_type_rejected(self, client):
        r = client.post("/api/v1/profiles", json={"user_id": "u", "service_type": "hybrid"})
        assert r.status_code == 422

    def test_get_profile(self, client):
        profile_id = client.post("/api/v1/profiles", json={"user_id": "u"}).json()["id"]
        r = client.get(f"/api/v1/profiles/{profile_id}")
        assert r.status_code == 200
        assert r.json()["user_id"] == "u"

    def test_get_missing_profile(self, client):
        assert client.get("/api/v1/profiles/missing").status_code == 404

    def test_update_profile_completes_onboarding(self, client):
        profile_id = client.post("/api/v1/profiles", json={"user_id": "u"}).json()["id"]
        r = client.put(f"/api/v1/profiles/{profile_id}", json={
            "bio": "Wedding videographer",
            "skills": ["Filming"],
            "onboarding_completed": True,
        })
        assert r.status_code == 200
        data = r.json()
        assert data["bio"] == "Wedding videographer"
        assert data["skills"] == ["Filming"]
        assert data["onboarding_completed"] is True

        r = client.get("/api/v1/search/freelancers?q=wedding")
        assert [h["item"]["id"] for h in r.json()["results"]] == [profile_id]
