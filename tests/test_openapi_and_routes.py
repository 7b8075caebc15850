def test_openapi_available(client):
    resp = client.get("/api/openapi.json")
    assert resp.status_code == 200
    data = resp.json()
    assert "paths" in data
    assert any(p.startswith("/api/v1/") for p in data.get("paths", {}))


def test_expected_routes_present(client):
    # Read the published schema rather than walking app.routes
    paths = client.get("/api/openapi.json").json()["paths"]
    methods_by_path = {path: {m.upper() for m in ops} for path, ops in paths.items()}

    for prefix in ("website-visits", "store-visits", "login-signup"):
        assert {"GET", "POST"} <= methods_by_path[f"/api/v1/{prefix}/"]
        assert {"GET", "PUT", "DELETE"} <= methods_by_path[f"/api/v1/{prefix}/{{record_id}}"]

    assert "GET" in methods_by_path["/api/v1/analytics/funnel"]
    assert "GET" in methods_by_path["/api/v1/analytics/contacts"]
    assert "GET" in methods_by_path["/api/v1/analytics/contacts/{contact}/journey"]
    assert "GET" in methods_by_path["/api/v1/export/{workflow}"]
    assert "GET" in methods_by_path["/api/health"]
