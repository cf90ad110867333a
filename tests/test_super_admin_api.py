TENANTS = "/api/super-admin/tenants"


def test_admin_is_denied(client_for, acme_admin, auth_headers):
    response = client_for("acme").get(TENANTS, headers=auth_headers(acme_admin))
    assert response.status_code == 403
    assert response.json() == {"message": "Requires role: superadmin", "error": "INSUFFICIENT_ROLE"}


def test_list_tenants(client_for, acme_superadmin, globex, auth_headers):
    response = client_for("acme").get(TENANTS, headers=auth_headers(acme_superadmin))
    assert response.status_code == 200
    assert [t["subdomain"] for t in response.json()] == ["acme", "globex"]


def test_create_tenant(client_for, acme_superadmin, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_superadmin)
    body = {"name": "Umbrella", "subdomain": " Umbrella ", "modules": ["maintenance", "checklists"]}

    created = client.post(TENANTS, json=body, headers=headers)
    assert created.status_code == 201
    assert created.json()["subdomain"] == "umbrella"
    assert created.json()["modules"] == ["checklists", "maintenance"]

    duplicate = client.post(TENANTS, json=body, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "CONFLICT"


def test_create_tenant_rejects_bad_input(client_for, acme_superadmin, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_superadmin)
    bad_module = client.post(TENANTS, json={"name": "X", "subdomain": "x", "modules": ["payroll"]}, headers=headers)
    assert bad_module.status_code == 422
    bad_subdomain = client.post(TENANTS, json={"name": "X", "subdomain": "a.b"}, headers=headers)
    assert bad_subdomain.status_code == 422


def test_update_tenant_modules(client_for, acme_superadmin, globex, auth_headers):
    response = client_for("acme").patch(
        f"{TENANTS}/{globex.id}",
        json={"name": "Globex Corp", "modules": ["kanban"]},
        headers=auth_headers(acme_superadmin),
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Globex Corp"
    assert response.json()["modules"] == ["kanban"]


def test_subdomain_cannot_change(client_for, acme_superadmin, globex, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_superadmin)
    response = client.patch(f"{TENANTS}/{globex.id}", json={"subdomain": "initrode"}, headers=headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Subdomain cannot be changed", "error": "BAD_REQUEST"}
    # Sending the current value is not a change
    assert client.patch(f"{TENANTS}/{globex.id}", json={"subdomain": "globex"}, headers=headers).status_code == 200


def test_delete_tenant(client_for, acme_superadmin, globex_admin, initech, auth_headers):
    client = client_for("acme")
    headers = auth_headers(acme_superadmin)

    in_use = client.delete(f"{TENANTS}/{globex_admin.tenant_id}", headers=headers)
    assert in_use.status_code == 409

    assert client.delete(f"{TENANTS}/{initech.id}", headers=headers).status_code == 204
    missing = client.get(f"{TENANTS}/{initech.id}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "TENANT_NOT_FOUND"
