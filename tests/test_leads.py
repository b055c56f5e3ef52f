from datetime import datetime, timedelta

from app.models.activity import Activity
from app.models.door_activity import DoorActivity
from app.models.enums import DoorOutcome, LeadStatus, TaskStatus
from app.models.lead import Lead
from app.models.task import Task

from conftest import auth_headers, make_lead


# ============================================================
# 1. LIST
# ============================================================

class TestListLeads:

    def test_requires_authentication(self, client):
        r = client.get("/leads")
        assert r.status_code == 401
        assert r.json() == {"error": "Not authenticated"}

    def test_invalid_token_is_rejected(self, client):
        r = client.get("/leads", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_rep_sees_only_own_leads(self, client, db, rep, other_rep):
        make_lead(db, rep, first_name="Mine")
        make_lead(db, other_rep, first_name="Theirs")

        r = client.get("/leads", headers=auth_headers(rep))
        assert r.status_code == 200
        names = [l["firstName"] for l in r.json()["data"]]
        assert names == ["Mine"]

    def test_admin_sees_all_leads(self, client, db, admin, rep, other_rep):
        make_lead(db, rep)
        make_lead(db, other_rep)
        make_lead(db, admin)

        r = client.get("/leads", headers=auth_headers(admin))
        assert r.json()["pagination"]["total"] == 3

    def test_pagination_shape(self, client, db, rep):
        for i in range(5):
            make_lead(db, rep, first_name=f"Lead{i}")

        r = client.get("/leads?page=2&limit=2", headers=auth_headers(rep))
        body = r.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}

    def test_newest_first(self, client, db, rep):
        now = datetime.utcnow()
        make_lead(db, rep, first_name="Old", created_at=now - timedelta(days=2))
        make_lead(db, rep, first_name="New", created_at=now)

        r = client.get("/leads", headers=auth_headers(rep))
        assert [l["firstName"] for l in r.json()["data"]] == ["New", "Old"]

    def test_search_is_case_insensitive(self, client, db, rep):
        make_lead(db, rep, last_name="Smith", company="Acme Roofing")
        make_lead(db, rep, last_name="Jones")

        r = client.get("/leads?search=ACME", headers=auth_headers(rep))
        assert [l["lastName"] for l in r.json()["data"]] == ["Smith"]

        r = client.get("/leads?search=jon", headers=auth_headers(rep))
        assert [l["lastName"] for l in r.json()["data"]] == ["Jones"]

    def test_status_filter(self, client, db, rep):
        make_lead(db, rep, status=LeadStatus.QUALIFIED)
        make_lead(db, rep, status=LeadStatus.NEW)

        r = client.get("/leads?status=QUALIFIED", headers=auth_headers(rep))
        data = r.json()["data"]
        assert len(data) == 1
        assert data[0]["status"] == "QUALIFIED"

    def test_unknown_status_is_400(self, client, rep):
        r = client.get("/leads?status=BOGUS", headers=auth_headers(rep))
        assert r.status_code == 400
        assert isinstance(r.json()["error"], list)

    def test_create_with_unknown_status_is_400(self, client, db, rep):
        r = client.post("/leads", json={"firstName": "A", "lastName": "B", "status": "BOGUS"},
                        headers=auth_headers(rep))
        assert r.status_code == 400
        assert any("status" in i["path"] for i in r.json()["error"])
        assert db.query(Lead).count() == 0

    def test_update_with_unknown_status_is_400(self, client, db, rep):
        lead = make_lead(db, rep, status=LeadStatus.CONTACTED)
        r = client.patch(f"/leads/{lead.id}", json={"status": "BOGUS"}, headers=auth_headers(rep))
        assert r.status_code == 400
        db.refresh(lead)
        assert lead.status == LeadStatus.CONTACTED


# ============================================================
# 2. CREATE
# ============================================================

class TestCreateLead:

    def test_create_assigns_actor_and_defaults_status(self, client, db, rep):
        r = client.post(
            "/leads",
            json={"firstName": "Sam", "lastName": "Field", "estimatedValue": 1200.5},
            headers=auth_headers(rep),
        )
        assert r.status_code == 201
        body = r.json()
        assert body["assignedToId"] == rep.id
        assert body["status"] == "NEW"
        assert body["estimatedValue"] == 1200.5
        assert db.query(Lead).count() == 1

    def test_missing_name_returns_issue_list(self, client, db, rep):
        r = client.post("/leads", json={"lastName": "Field"}, headers=auth_headers(rep))
        assert r.status_code == 400
        issues = r.json()["error"]
        assert any("firstName" in i["path"] for i in issues)
        assert all({"path", "message", "type"} <= set(i) for i in issues)
        assert db.query(Lead).count() == 0

    def test_invalid_email_rejected(self, client, rep):
        r = client.post(
            "/leads",
            json={"firstName": "A", "lastName": "B", "email": "not-an-email"},
            headers=auth_headers(rep),
        )
        assert r.status_code == 400

    def test_latitude_out_of_range_rejected(self, client, rep):
        r = client.post(
            "/leads",
            json={"firstName": "A", "lastName": "B", "latitude": 123},
            headers=auth_headers(rep),
        )
        assert r.status_code == 400


# ============================================================
# 3. READ / UPDATE / DELETE
# ============================================================

class TestSingleLead:

    def test_other_reps_lead_is_not_found(self, client, db, rep, other_rep):
        lead = make_lead(db, other_rep)
        r = client.get(f"/leads/{lead.id}", headers=auth_headers(rep))
        assert r.status_code == 404
        assert r.json() == {"error": "Lead not found"}

    def test_admin_can_read_any_lead(self, client, db, admin, rep):
        lead = make_lead(db, rep)
        r = client.get(f"/leads/{lead.id}", headers=auth_headers(admin))
        assert r.status_code == 200
        assert r.json()["assignedTo"]["id"] == rep.id

    def test_detail_includes_history(self, client, db, rep):
        lead = make_lead(db, rep)
        now = datetime.utcnow()
        for i in range(12):
            db.add(Activity(type="CALL", subject=f"Call {i}", lead_id=lead.id,
                            date_time=now - timedelta(hours=i)))
        for i in range(7):
            db.add(Task(title=f"Open {i}", lead_id=lead.id, due_date=now + timedelta(days=i)))
        db.add(Task(title="Done", lead_id=lead.id, status=TaskStatus.COMPLETED))
        db.add(DoorActivity(outcome=DoorOutcome.NO_ANSWER, latitude=1.0, longitude=2.0,
                            user_id=rep.id, lead_id=lead.id))
        db.commit()

        r = client.get(f"/leads/{lead.id}", headers=auth_headers(rep))
        body = r.json()
        assert len(body["activities"]) == 10
        assert body["activities"][0]["subject"] == "Call 0"
        assert len(body["tasks"]) == 5
        assert [t["title"] for t in body["tasks"]] == [f"Open {i}" for i in range(5)]
        assert len(body["doorActivities"]) == 1

    def test_partial_update(self, client, db, rep):
        lead = make_lead(db, rep, company="Old Co")
        r = client.patch(f"/leads/{lead.id}", json={"company": "New Co"}, headers=auth_headers(rep))
        assert r.status_code == 200
        assert r.json()["company"] == "New Co"
        assert r.json()["firstName"] == "Jane"

    def test_update_cannot_clear_name(self, client, db, rep):
        lead = make_lead(db, rep)
        r = client.patch(f"/leads/{lead.id}", json={"firstName": None}, headers=auth_headers(rep))
        assert r.status_code == 400

    def test_update_other_reps_lead_is_not_found(self, client, db, rep, other_rep):
        lead = make_lead(db, other_rep, company="Keep")
        r = client.patch(f"/leads/{lead.id}", json={"company": "Hijack"}, headers=auth_headers(rep))
        assert r.status_code == 404
        db.refresh(lead)
        assert lead.company == "Keep"

    def test_delete(self, client, db, rep):
        lead = make_lead(db, rep)
        r = client.delete(f"/leads/{lead.id}", headers=auth_headers(rep))
        assert r.json() == {"success": True}
        assert client.get(f"/leads/{lead.id}", headers=auth_headers(rep)).status_code == 404

    def test_delete_other_reps_lead_is_not_found(self, client, db, rep, other_rep):
        lead = make_lead(db, other_rep)
        r = client.delete(f"/leads/{lead.id}", headers=auth_headers(rep))
        assert r.status_code == 404
        assert db.query(Lead).count() == 1
