from app.models.lead import Lead

from conftest import auth_headers, make_lead, make_user


# ============================================================
# 1. SINGLE REASSIGNMENT
# ============================================================

class TestReassign:

    def test_leaving_admin_becomes_overseeing_admin(self, client, db, admin, rep):
        lead = make_lead(db, admin)

        r = client.post(f"/leads/{lead.id}/assign", json={"assignedToId": rep.id},
                        headers=auth_headers(admin))
        assert r.status_code == 200
        body = r.json()
        assert body["assignedToId"] == rep.id
        assert body["assignedAdminId"] == admin.id

    def test_overseeing_admin_is_never_overwritten(self, client, db, admin, rep, other_rep):
        second_admin = make_user(db, "boss@example.com", role="admin")
        lead = make_lead(db, admin)

        client.post(f"/leads/{lead.id}/assign", json={"assignedToId": second_admin.id},
                    headers=auth_headers(admin))
        client.post(f"/leads/{lead.id}/assign", json={"assignedToId": rep.id},
                    headers=auth_headers(admin))
        client.post(f"/leads/{lead.id}/assign", json={"assignedToId": other_rep.id},
                    headers=auth_headers(admin))

        db.refresh(lead)
        assert lead.assigned_to_id == other_rep.id
        assert lead.assigned_admin_id == admin.id

    def test_rep_to_rep_keeps_admin_unset(self, client, db, rep, other_rep):
        lead = make_lead(db, rep)

        r = client.post(f"/leads/{lead.id}/assign", json={"assignedToId": other_rep.id},
                        headers=auth_headers(rep))
        assert r.status_code == 200
        assert r.json()["assignedToId"] == other_rep.id
        assert r.json()["assignedAdminId"] is None

    def test_same_owner_is_noop(self, client, db, admin):
        lead = make_lead(db, admin)

        r = client.post(f"/leads/{lead.id}/assign", json={"assignedToId": admin.id},
                        headers=auth_headers(admin))
        assert r.status_code == 200
        assert r.json()["assignedAdminId"] is None

    def test_unknown_target_is_404(self, client, db, rep):
        lead = make_lead(db, rep)

        r = client.post(f"/leads/{lead.id}/assign", json={"assignedToId": "nobody"},
                        headers=auth_headers(rep))
        assert r.status_code == 404
        assert r.json() == {"error": "Target user not found"}
        db.refresh(lead)
        assert lead.assigned_to_id == rep.id

    def test_out_of_scope_lead_is_404(self, client, db, rep, other_rep):
        lead = make_lead(db, other_rep)

        r = client.post(f"/leads/{lead.id}/assign", json={"assignedToId": rep.id},
                        headers=auth_headers(rep))
        assert r.status_code == 404
        db.refresh(lead)
        assert lead.assigned_to_id == other_rep.id

    def test_patch_owner_follows_same_rule(self, client, db, admin, rep):
        lead = make_lead(db, admin)

        r = client.patch(f"/leads/{lead.id}", json={"assignedToId": rep.id},
                         headers=auth_headers(admin))
        assert r.status_code == 200
        assert r.json()["assignedToId"] == rep.id
        assert r.json()["assignedAdminId"] == admin.id

    def test_patch_null_owner_releases_to_pool(self, client, db, admin):
        lead = make_lead(db, admin)

        r = client.patch(f"/leads/{lead.id}", json={"assignedToId": None},
                         headers=auth_headers(admin))
        assert r.status_code == 200
        assert r.json()["assignedToId"] is None
        assert r.json()["assignedAdminId"] == admin.id


# ============================================================
# 2. BULK REASSIGNMENT
# ============================================================

class TestBulkReassign:

    def test_requires_admin(self, client, db, rep, other_rep):
        lead = make_lead(db, rep)

        r = client.post("/leads/bulk-assign",
                        json={"leadIds": [lead.id], "assignedToId": other_rep.id},
                        headers=auth_headers(rep))
        assert r.status_code == 403
        db.refresh(lead)
        assert lead.assigned_to_id == rep.id

    def test_each_lead_inspected_individually(self, client, db, admin, rep, other_rep):
        from_admin = make_lead(db, admin)
        from_rep = make_lead(db, rep)

        r = client.post("/leads/bulk-assign",
                        json={"leadIds": [from_admin.id, from_rep.id], "assignedToId": other_rep.id},
                        headers=auth_headers(admin))
        assert r.status_code == 200
        assert r.json() == {"message": "Successfully reassigned 2 leads", "count": 2}

        db.refresh(from_admin)
        db.refresh(from_rep)
        assert from_admin.assigned_to_id == other_rep.id
        assert from_admin.assigned_admin_id == admin.id
        assert from_rep.assigned_to_id == other_rep.id
        assert from_rep.assigned_admin_id is None

    def test_unknown_ids_are_excluded(self, client, db, admin, rep):
        lead = make_lead(db, admin)

        r = client.post("/leads/bulk-assign",
                        json={"leadIds": [lead.id, "missing-1", "missing-2"], "assignedToId": rep.id},
                        headers=auth_headers(admin))
        assert r.json()["count"] == 1

    def test_unknown_target_is_404(self, client, db, admin):
        lead = make_lead(db, admin)

        r = client.post("/leads/bulk-assign",
                        json={"leadIds": [lead.id], "assignedToId": "nobody"},
                        headers=auth_headers(admin))
        assert r.status_code == 404
        assert db.query(Lead).filter(Lead.assigned_to_id == admin.id).count() == 1

    def test_empty_id_list_is_400(self, client, admin, rep):
        r = client.post("/leads/bulk-assign",
                        json={"leadIds": [], "assignedToId": rep.id},
                        headers=auth_headers(admin))
        assert r.status_code == 400
