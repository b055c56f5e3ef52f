from app.models.user import User
from app.services.user_service import UserService

from conftest import auth_headers, make_lead


class TestRegisterLogin:

    def test_register_always_creates_plain_user(self, client, db):
        r = client.post("/auth/register", json={
            "email": "new@example.com", "password": "longenough", "name": "New Person",
        })
        assert r.status_code == 201
        body = r.json()
        assert body["role"] == "user"
        assert "passwordHash" not in body
        assert db.query(User).filter(User.email == "new@example.com").one().password_hash != "longenough"

    def test_duplicate_email_rejected(self, client, rep):
        r = client.post("/auth/register", json={
            "email": "REP@example.com", "password": "longenough", "name": "Dup",
        })
        assert r.status_code == 400
        assert r.json() == {"error": "Email already registered"}

    def test_short_password_rejected(self, client):
        r = client.post("/auth/register", json={"email": "a@example.com", "password": "short", "name": "A"})
        assert r.status_code == 400

    def test_login_returns_token_and_cookie(self, client, rep):
        r = client.post("/auth/login", json={"email": "rep@example.com", "password": "password123"})
        assert r.status_code == 200
        token = r.json()["accessToken"]
        assert r.json()["tokenType"] == "bearer"
        assert "access_token" in r.cookies

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.json()["id"] == rep.id

    def test_wrong_password_is_401(self, client, rep):
        r = client.post("/auth/login", json={"email": "rep@example.com", "password": "nope-nope"})
        assert r.status_code == 401

    def test_token_for_deleted_user_is_401(self, client, db, rep):
        headers = auth_headers(rep)
        db.delete(rep)
        db.commit()
        assert client.get("/auth/me", headers=headers).status_code == 401


class TestRoles:

    def test_assign_role(self, db, rep):
        UserService(db).assign_role("rep@example.com", "admin")
        db.refresh(rep)
        assert rep.is_admin

    def test_users_list_is_admin_only(self, client, rep):
        r = client.get("/users", headers=auth_headers(rep))
        assert r.status_code == 403
        assert r.json() == {"error": "Admin access required"}

    def test_users_list_counts_leads(self, client, db, admin, rep):
        lead = make_lead(db, rep)
        lead.assigned_admin_id = admin.id
        make_lead(db, rep)
        db.commit()

        r = client.get("/users", headers=auth_headers(admin))
        assert r.status_code == 200
        users = {u["email"]: u for u in r.json()}
        assert users["rep@example.com"]["leadCount"] == 2
        assert users["admin@example.com"]["administeredLeadCount"] == 1
        assert users["admin@example.com"]["leadCount"] == 0
