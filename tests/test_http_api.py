from __future__ import annotations

import codecs
from datetime import date, timedelta

from workstream.core.enums import Role


def test_health_and_favicon(client):
    assert client.get("/").get_json() == {"message": "API is running..."}
    assert client.get("/favicon.ico").status_code == 204


def test_unknown_route_is_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"message": "Not Found - /nope"}


def test_protected_route_requires_token(client):
    resp = client.get("/auth/me")
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Not authorized, no token"

    resp = client.get("/auth/me", headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Not authorized, token failed"


def test_token_for_deleted_user_is_rejected(client, fakes, employee, auth_headers):
    headers = auth_headers(employee)
    fakes.users.delete_by_id(employee.user_id)

    resp = client.get("/auth/me", headers=headers)
    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Not authorized, user not found"


def test_login_then_me(client, employee):
    resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "secret1"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["_id"] == employee.user_id
    assert body["role"] == "employee"

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {body['token']}"}).get_json()
    assert me["email"] == "alice@example.com"
    assert "passwordHash" not in me


def test_login_failure_is_401(client, employee):
    resp = client.post("/auth/login", json={"email": "alice@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Invalid email or password"}


def test_register_admin_returns_201_with_iso_joining_date(client):
    resp = client.post(
        "/auth/register-admin", json={"name": "Root", "email": "root@example.com", "password": "secret1"}
    )
    assert resp.status_code == 201
    assert resp.get_json()["joiningDate"] == date.today().isoformat()


def test_role_guards(client, fakes, employee, auth_headers):
    resp = client.get("/attendance/summary", headers=auth_headers(employee))
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Not authorized as a sub-admin"

    sub = fakes.users.add("Sub", role=Role.SUB_ADMIN)
    assert client.get("/attendance/summary", headers=auth_headers(sub)).status_code == 200
    resp = client.post(
        "/auth/create-subadmin",
        headers=auth_headers(sub),
        json={"name": "X", "email": "x@example.com", "password": "secret1"},
    )
    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Not authorized as an admin"


def test_create_employee_and_list(client, admin, auth_headers):
    resp = client.post(
        "/auth/create-employee",
        headers=auth_headers(admin),
        json={"name": "Erin", "email": "erin@example.com", "password": "secret1", "salary": 4000},
    )
    assert resp.status_code == 201
    assert resp.get_json()["createdBy"] == admin.user_id

    users = client.get("/auth/users?role=employee", headers=auth_headers(admin)).get_json()
    assert [u["name"] for u in users] == ["Erin"]


def test_checkin_and_checkout_gate(client, employee, auth_headers):
    headers = auth_headers(employee)

    resp = client.post("/attendance/checkin", headers=headers)
    assert resp.status_code == 201
    assert resp.get_json()["status"] in ("present", "late")

    resp = client.post("/attendance/checkout", headers=headers, json={})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["requiresConfirmation"] is True
    assert body["halfDay"] is True
    assert "confirm" in body["message"]

    resp = client.post("/attendance/checkout", headers=headers, json={"confirmEarly": "false"})
    assert resp.status_code == 400
    assert "confirmEarly" in resp.get_json()["message"]

    resp = client.post("/attendance/checkout", headers=headers, json={"confirmEarly": True})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "half_day"


def test_employee_cannot_read_other_calendar(client, fakes, employee, auth_headers):
    other = fakes.users.add("Bob")
    resp = client.get(f"/attendance/calendar/{other.user_id}?month=3&year=2025", headers=auth_headers(employee))
    assert resp.status_code == 403


def test_calendar_shape(client, employee, auth_headers):
    resp = client.get(f"/attendance/calendar/{employee.user_id}?month=2&year=2025", headers=auth_headers(employee))
    days = resp.get_json()
    assert len(days) == 28
    assert days[0]["date"] == "2025-02-01"
    assert days[0]["dayName"] == "Sat"
    assert days[0]["status"] == "weekend"


def test_export_is_csv_with_bom(client, admin, auth_headers):
    resp = client.get("/attendance/export?startDate=2025-03-01&endDate=2025-03-31", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert resp.data.startswith(codecs.BOM_UTF8 + b"Date,Employee")
    assert "attendance_20250301_20250331.csv" in resp.headers["Content-Disposition"]


def test_report_requires_range(client, admin, auth_headers):
    resp = client.get("/reports/attendance", headers=auth_headers(admin))
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Please provide startDate and endDate"


def test_leave_apply_and_approve(client, admin, employee, auth_headers):
    start = date.today() + timedelta(days=30)
    resp = client.post(
        "/leaves/apply",
        headers=auth_headers(employee),
        json={"leaveType": "Annual", "reason": "holiday", "startDate": start.isoformat()},
    )
    assert resp.status_code == 201
    leave = resp.get_json()
    assert leave["status"] == "pending"

    pending = client.get("/leaves/pending", headers=auth_headers(admin)).get_json()
    assert [item["_id"] for item in pending] == [leave["_id"]]

    resp = client.post(f"/leaves/approve/{leave['_id']}", headers=auth_headers(admin))
    assert resp.get_json()["status"] == "approved"

    balances = client.get(
        f"/leaves/balance/{employee.user_id}?year={start.year}", headers=auth_headers(employee)
    ).get_json()
    assert {b["type"] for b in balances} == {"Casual", "Sick", "Annual", "Maternity"}


def test_settings_read_and_guarded_update(client, admin, employee, auth_headers):
    assert client.get("/settings", headers=auth_headers(employee)).get_json()["companyName"] == "WorkStream Inc."
    assert client.put("/settings", headers=auth_headers(employee), json={}).status_code == 403

    resp = client.put("/settings", headers=auth_headers(admin), json={"companyName": "Acme"})
    assert resp.get_json()["companyName"] == "Acme"


def test_holiday_delete_is_admin_only(client, fakes, admin, auth_headers):
    sub = fakes.users.add("Sub", role=Role.SUB_ADMIN)
    future = (date.today() + timedelta(days=10)).isoformat()
    created = client.post("/holidays", headers=auth_headers(sub), json={"name": "X", "date": future})
    assert created.status_code == 201
    holiday_id = created.get_json()["_id"]

    assert client.delete(f"/holidays/{holiday_id}", headers=auth_headers(sub)).status_code == 403
    assert client.delete(f"/holidays/{holiday_id}", headers=auth_headers(admin)).status_code == 200


def test_salary_generation_and_overview(client, admin, employee, auth_headers):
    resp = client.post("/salaries/generate", headers=auth_headers(admin), json={"month": 3, "year": 2025})
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["created"] == 1
    assert body["records"][0]["user"]["name"] == "Alice"

    overview = client.get(f"/auth/user-overview/{employee.user_id}", headers=auth_headers(admin)).get_json()
    assert overview["profile"]["_id"] == employee.user_id
    assert overview["recentSalary"]["netPay"] == 30000

    assert client.get("/auth/user-overview/999", headers=auth_headers(admin)).status_code == 404
