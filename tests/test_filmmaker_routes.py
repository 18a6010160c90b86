"""
Tests for filmmaker outreach endpoints
"""
from film_distribution.schemas import FilmmakerContactCreate


CSV = (
    "Name,Email,Film Title,Year\n"
    "Ava Martin,ava@example.com,Night Harbor,2023\n"
    "Luis Ortega,luis@example.com,Salt Roads,2022\n"
    "Missing Email,,Nothing,2021\n"
)


class TestImport:
    """Test POST /api/filmmakers/import"""

    def test_import(self, client, storage):
        response = client.post("/api/filmmakers/import", json={"csvContent": CSV})

        assert response.status_code == 200
        assert response.json() == {"success": True, "imported": 2, "failed": 1}
        assert storage.contacts.get_by_email("luis@example.com").value.film_title == "Salt Roads"

    def test_reimport_counts_duplicates_as_failed(self, client):
        client.post("/api/filmmakers/import", json={"csvContent": CSV})

        response = client.post("/api/filmmakers/import", json={"csvContent": CSV})

        assert response.json() == {"success": True, "imported": 0, "failed": 3}

    def test_missing_content(self, client):
        for body in ({}, {"csvContent": "   "}):
            response = client.post("/api/filmmakers/import", json=body)

            assert response.status_code == 400
            assert response.json()["error"]["message"] == "CSV content is required"


class TestList:
    """Test GET /api/filmmakers"""

    def test_paginated_list(self, client, storage):
        for n in range(3):
            storage.contacts.create(FilmmakerContactCreate(name=f"Filmmaker {n}", email=f"f{n}@example.com"))

        response = client.get("/api/filmmakers", params={"page": 1, "limit": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["page"] == 1
        assert data["limit"] == 2
        assert len(data["filmmakers"]) == 2

    def test_search(self, client, storage):
        storage.contacts.create(FilmmakerContactCreate(name="Ava Martin", email="ava@example.com"))
        storage.contacts.create(FilmmakerContactCreate(name="Luis Ortega", email="luis@example.com"))

        data = client.get("/api/filmmakers", params={"search": "ava"}).json()

        assert [f["name"] for f in data["filmmakers"]] == ["Ava Martin"]

    def test_limit_out_of_range(self, client):
        assert client.get("/api/filmmakers", params={"limit": 500}).status_code == 422
        assert client.get("/api/filmmakers", params={"page": 0}).status_code == 422


class TestInvitations:
    """Test the invite endpoints"""

    def test_invite(self, client, storage, email_provider):
        contact = storage.contacts.create(FilmmakerContactCreate(name="Ava Martin", email="ava@example.com"))

        response = client.post("/api/filmmakers/invite", json={"filmmakerIds": [contact.id, 999], "sentBy": 1})

        assert response.status_code == 200
        assert response.json() == {"success": True, "sent": 1, "failed": 1}
        assert [m.to for m in email_provider.sent] == ["ava@example.com"]
        assert storage.contacts.get(contact.id).value.invitation_count == 1

    def test_bulk_invite_with_custom_message(self, client, storage, email_provider):
        first = storage.contacts.create(FilmmakerContactCreate(name="Ava Martin", email="ava@example.com"))
        second = storage.contacts.create(FilmmakerContactCreate(name="Luis Ortega", email="luis@example.com"))

        response = client.post("/api/email/bulk-invite", json={
            "filmmakerIds": [first.id, second.id],
            "sentBy": 1,
            "subject": "Festival season",
            "message": "Submissions close Friday.",
        })

        assert response.json() == {"success": True, "count": 2, "sent": 2, "failed": 0}
        assert {m.subject for m in email_provider.sent} == {"Festival season"}
        assert all("Submissions close Friday." in m.text_body for m in email_provider.sent)

    def test_email_outage_still_returns_counts(self, client, storage, email_provider):
        contact = storage.contacts.create(FilmmakerContactCreate(name="Ava Martin", email="ava@example.com"))
        email_provider.raise_error = True

        response = client.post("/api/email/bulk-invite", json={"filmmakerIds": [contact.id], "sentBy": 1})

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 1, "sent": 0, "failed": 1}

    def test_no_selection(self, client):
        for path in ("/api/filmmakers/invite", "/api/email/bulk-invite"):
            response = client.post(path, json={"filmmakerIds": [], "sentBy": 1})

            assert response.status_code == 400
            assert response.json()["error"]["message"] == "At least one filmmaker must be selected"
