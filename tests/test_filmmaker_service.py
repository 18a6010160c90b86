"""
Tests for filmmaker outreach: CSV parsing, listing and invitations
"""
from film_distribution.schemas import FilmmakerContactCreate
from film_distribution.services.filmmaker_service import FilmmakerService, parse_contacts_csv
from conftest import RecordingEmailProvider


class TestParseContactsCsv:
    """Test CSV parsing"""

    def test_header_variants_are_recognized(self):
        csv_content = (
            "Full Name,Email Address,filmTitle,Submission-Year,category,Tags\n"
            "Ava Martin,Ava@Example.com,Night Harbor,2023,Drama,short; drama\n"
        )

        contacts, invalid = parse_contacts_csv(csv_content)

        assert invalid == 0
        assert len(contacts) == 1
        parsed = contacts[0]
        assert parsed.name == "Ava Martin"
        assert parsed.email == "ava@example.com"
        assert parsed.film_title == "Night Harbor"
        assert parsed.submission_year == 2023
        assert parsed.film_category == "Drama"
        assert parsed.tags == ["short", "drama"]

    def test_unknown_columns_go_to_additional_info(self):
        contacts, _ = parse_contacts_csv("name,email,Country,Website\nAva,ava@example.com,FR,\n")

        assert contacts[0].additional_info == {"Country": "FR"}

    def test_invalid_rows_are_counted(self):
        csv_content = (
            "name,email\n"
            "Ava,ava@example.com\n"
            "No Email,\n"
            ",nameless@example.com\n"
            "Bad Email,not-an-address\n"
        )

        contacts, invalid = parse_contacts_csv(csv_content)

        assert [c.email for c in contacts] == ["ava@example.com"]
        assert invalid == 3

    def test_unparseable_year_is_dropped(self):
        contacts, invalid = parse_contacts_csv("name,email,year\nAva,ava@example.com,soon\n")

        assert invalid == 0
        assert contacts[0].submission_year is None

    def test_empty_content(self):
        assert parse_contacts_csv("") == ([], 0)
        assert parse_contacts_csv("name,email\n") == ([], 0)


class TestImportAndList:

    def test_import_counts_invalid_rows_as_failed(self, db_session, storage):
        storage.contacts.create(FilmmakerContactCreate(name="Ava", email="ava@example.com"))
        csv_content = (
            "name,email\n"
            "Ava Again,ava@example.com\n"
            "Luis,luis@example.com\n"
            "Broken,\n"
        )

        result = FilmmakerService(db_session).import_csv(csv_content)

        assert result == {"imported": 1, "failed": 2}

    def test_list_paginates(self, db_session, storage):
        for n in range(5):
            storage.contacts.create(FilmmakerContactCreate(name=f"Filmmaker {n}", email=f"f{n}@example.com"))
        service = FilmmakerService(db_session)

        page = service.list_filmmakers(page=2, limit=2)

        assert page["total"] == 5
        assert page["page"] == 2
        assert page["limit"] == 2
        assert len(page["filmmakers"]) == 2
        assert set(page["filmmakers"][0]) >= {"id", "name", "email", "invitation_count", "date_added"}

    def test_list_clamps_arguments(self, db_session):
        page = FilmmakerService(db_session).list_filmmakers(page=0, limit=1000)

        assert page["page"] == 1
        assert page["limit"] == 100
        assert page["filmmakers"] == []

    def test_list_search(self, db_session, storage):
        storage.contacts.create(FilmmakerContactCreate(name="Ava Martin", email="ava@example.com"))
        storage.contacts.create(FilmmakerContactCreate(name="Luis Ortega", email="luis@example.com"))

        page = FilmmakerService(db_session).list_filmmakers(search=" ortega ")

        assert page["total"] == 1
        assert page["filmmakers"][0]["name"] == "Luis Ortega"


class TestInvitations:
    """Test sending invitations"""

    def test_sends_and_marks_invited(self, db_session, storage, email_provider):
        contact = storage.contacts.create(FilmmakerContactCreate(
            name="Ava Martin", email="ava@example.com", film_title="Night Harbor"
        ))

        result = FilmmakerService(db_session, email_provider).send_invitations(
            [contact.id], sent_by=1, message="We loved your film."
        )

        assert result == {"sent": 1, "failed": 0}
        assert email_provider.sent[0].to == "ava@example.com"
        assert "Ava Martin" in email_provider.sent[0].text_body
        assert "We loved your film." in email_provider.sent[0].text_body
        refreshed = storage.contacts.get(contact.id).value
        assert refreshed.invitation_sent is True
        assert refreshed.invitation_count == 1
        assert [e.status for e in storage.emails.get_sent_by_user(1).value] == ["sent"]

    def test_custom_subject(self, db_session, storage, email_provider):
        contact = storage.contacts.create(FilmmakerContactCreate(name="Ava", email="ava@example.com"))

        FilmmakerService(db_session, email_provider).send_invitations([contact.id], sent_by=1, subject="Join us")

        assert email_provider.sent[0].subject == "Join us"

    def test_missing_contact_counts_as_failed(self, db_session, storage, email_provider):
        contact = storage.contacts.create(FilmmakerContactCreate(name="Ava", email="ava@example.com"))

        result = FilmmakerService(db_session, email_provider).send_invitations([contact.id, 999], sent_by=1)

        assert result == {"sent": 1, "failed": 1}

    def test_failed_delivery_is_recorded_and_not_marked(self, db_session, storage):
        contact = storage.contacts.create(FilmmakerContactCreate(name="Ava", email="ava@example.com"))

        result = FilmmakerService(db_session, RecordingEmailProvider(fail=True)).send_invitations(
            [contact.id], sent_by=2
        )

        assert result == {"sent": 0, "failed": 1}
        assert storage.contacts.get(contact.id).value.invitation_sent is False
        assert [e.status for e in storage.emails.get_sent_by_user(2).value] == ["failed"]

    def test_provider_error_does_not_abort_the_batch(self, db_session, storage):
        first = storage.contacts.create(FilmmakerContactCreate(name="Ava", email="ava@example.com"))
        second = storage.contacts.create(FilmmakerContactCreate(name="Luis", email="luis@example.com"))

        result = FilmmakerService(db_session, RecordingEmailProvider(raise_error=True)).send_invitations(
            [first.id, second.id], sent_by=3
        )

        assert result == {"sent": 0, "failed": 2}
        assert [e.status for e in storage.emails.get_sent_by_user(3).value] == ["failed", "failed"]
        assert storage.contacts.get_without_invitation().value != []
