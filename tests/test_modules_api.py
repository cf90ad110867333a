from jose import jwt

from deviflow.core.config import settings

# Password the conftest fixtures give every seeded user
PASSWORD = "correct-horse-battery"
CHECKLISTS = "/api/modules/checklists"
MAINTENANCE = "/api/modules/maintenance"


def test_acme_admin_scenario(client_for, acme_admin):
    client = client_for("acme")
    login = client.post("/api/auth/login", json={"email": "admin@acme.test", "password": PASSWORD})
    assert login.status_code == 200
    token = login.json()["token"]
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    assert claims["tenantId"] == 7
    assert claims["role"] == "admin"

    headers = {"Authorization": f"Bearer {token}"}
    assert client.get(f"{CHECKLISTS}/checklists", headers=headers).status_code == 200

    denied = client.get(f"{MAINTENANCE}/work-orders", headers=headers)
    assert denied.status_code == 403
    assert denied.json() == {
        "message": "Module 'maintenance' not enabled for this tenant",
        "error": "MODULE_ACCESS_DENIED",
    }


def test_module_gate_applies_to_admins(client_for, initech_admin, auth_headers):
    response = client_for("initech").get(f"{CHECKLISTS}/checklists", headers=auth_headers(initech_admin))
    assert response.status_code == 403
    assert response.json()["error"] == "MODULE_ACCESS_DENIED"
    assert "checklists" in response.json()["message"]


def test_module_routes_require_token(client_for, acme):
    response = client_for("acme").get(f"{CHECKLISTS}/checklists")
    assert response.status_code == 401


def test_list_modules(client_for, acme_user, auth_headers):
    response = client_for("acme").get("/api/modules", headers=auth_headers(acme_user))
    assert response.status_code == 200
    data = response.json()
    assert data["modules"] == ["checklists"]
    enabled = {m["name"]: m["enabled"] for m in data["available_modules"]}
    assert enabled == {"checklists": True, "maintenance": False, "deviations": False, "kanban": False}


def test_checklist_lifecycle(client_for, acme_admin, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_admin)

    created = client.post(
        f"{CHECKLISTS}/checklists",
        json={"name": "Kvalitetskontroll", "description": "Daily", "order": 1},
        headers=headers,
    )
    assert created.status_code == 201
    checklist_id = created.json()["id"]

    category = client.post(
        f"{CHECKLISTS}/categories",
        json={"checklist_id": checklist_id, "name": "Safety", "order": 1},
        headers=headers,
    )
    assert category.status_code == 201
    category_id = category.json()["id"]

    categories = client.get(f"{CHECKLISTS}/checklists/{checklist_id}/categories", headers=headers)
    assert [c["name"] for c in categories.json()] == ["Safety"]

    renamed = client.put(f"{CHECKLISTS}/categories/{category_id}", json={"name": "Quality"}, headers=headers)
    assert renamed.json()["name"] == "Quality"

    updated = client.put(f"{CHECKLISTS}/checklists/{checklist_id}", json={"is_active": False}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["is_active"] is False
    assert client.get(f"{CHECKLISTS}/checklists/active", headers=headers).json() == []

    assert client.delete(f"{CHECKLISTS}/checklists/{checklist_id}", headers=headers).status_code == 204
    assert client.get(f"{CHECKLISTS}/checklists/{checklist_id}", headers=headers).status_code == 404
    assert client.delete(f"{CHECKLISTS}/categories/{category_id}", headers=headers).status_code == 404


def test_checklist_writes_are_admin_only(client_for, acme_user, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_user)
    assert client.get(f"{CHECKLISTS}/checklists", headers=headers).status_code == 200
    response = client.post(f"{CHECKLISTS}/checklists", json={"name": "Nope"}, headers=headers)
    assert response.status_code == 403
    assert response.json() == {"message": "Requires role: admin, superadmin", "error": "INSUFFICIENT_ROLE"}


def test_work_orders(client_for, globex_admin, make_user, auth_headers):
    client = client_for("globex")
    technician = make_user(globex_admin.tenant, "tech@globex.test")

    created = client.post(
        f"{MAINTENANCE}/work-orders",
        json={"title": "Replace hydraulic hose", "tenantId": 7},
        headers=auth_headers(technician),
    )
    assert created.status_code == 201
    work_order = created.json()
    assert work_order["tenant_id"] == 8
    assert work_order["status"] == "open"
    assert work_order["created_by"] == technician.id

    updated = client.put(
        f"{MAINTENANCE}/work-orders/{work_order['id']}",
        json={"status": "in_progress"},
        headers=auth_headers(technician),
    )
    assert updated.json()["status"] == "in_progress"

    url = f"{MAINTENANCE}/work-orders/{work_order['id']}"
    assert client.delete(url, headers=auth_headers(technician)).status_code == 403
    assert client.delete(url, headers=auth_headers(globex_admin)).status_code == 204
    assert client.get(url, headers=auth_headers(globex_admin)).status_code == 404


def test_null_for_required_column_is_rejected(client_for, globex_admin, auth_headers):
    client = client_for("globex")
    headers = auth_headers(globex_admin)
    checklist = client.post(f"{CHECKLISTS}/checklists", json={"name": "Press"}, headers=headers).json()
    category = client.post(
        f"{CHECKLISTS}/categories", json={"checklist_id": checklist["id"], "name": "Safety"}, headers=headers
    ).json()
    work_order = client.post(f"{MAINTENANCE}/work-orders", json={"title": "Oil leak"}, headers=headers).json()

    for path, body in (
        (f"{CHECKLISTS}/checklists/{checklist['id']}", {"name": None}),
        (f"{CHECKLISTS}/checklists/{checklist['id']}", {"is_active": None}),
        (f"{CHECKLISTS}/checklists/{checklist['id']}", {"order": None}),
        (f"{CHECKLISTS}/categories/{category['id']}", {"name": None}),
        (f"{MAINTENANCE}/work-orders/{work_order['id']}", {"title": None}),
        (f"{MAINTENANCE}/work-orders/{work_order['id']}", {"status": None}),
    ):
        response = client.put(path, json=body, headers=headers)
        assert response.status_code == 422, (path, body)
        assert response.json()["message"] == "Invalid request data"


def test_nullable_column_can_be_cleared(client_for, acme_admin, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_admin)
    created = client.post(
        f"{CHECKLISTS}/checklists", json={"name": "Line", "description": "Morning round"}, headers=headers
    ).json()
    response = client.put(f"{CHECKLISTS}/checklists/{created['id']}", json={"description": None}, headers=headers)
    assert response.status_code == 200
    assert response.json()["description"] is None
    assert response.json()["name"] == "Line"
