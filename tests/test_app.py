# tests/test_app.py
from app.core.config import get_settings
from app.routers import products as products_router


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_unknown_api_route_is_json_404(client):
    for method in ("get", "post", "delete"):
        resp = getattr(client, method)("/api/nope")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Route not found"}


def test_wrong_method_on_known_api_path_is_404(client):
    resp = client.patch("/api/products/1")

    assert resp.status_code == 404


def test_non_integer_product_id_is_a_validation_error(client, admin_headers):
    resp = client.get("/api/products/abc", headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("product_id:")


def test_website_fallback_serves_entry_page(client, public_dir):
    resp = client.get("/some/client/route")

    assert resp.status_code == 200
    assert resp.text == "<html>home</html>"


def test_website_serves_static_files(client, public_dir):
    assert client.get("/styles.css").text == "body {}"
    assert client.get("/").text == "<html>home</html>"
    assert client.get("/admin").text == "<html>admin</html>"


def test_website_does_not_escape_public_root(client, public_dir):
    resp = client.get("/..%2F..%2Fetc%2Fpasswd")

    assert resp.text == "<html>home</html>"


def test_internal_errors_show_detail_in_development(client, monkeypatch):
    def boom(session):
        raise RuntimeError("db exploded")

    monkeypatch.setattr(products_router.service, "list_products", boom)

    resp = client.get("/api/products/public")

    assert resp.status_code == 500
    assert resp.json()["detail"] == "db exploded"
    assert resp.json()["error"] == "RuntimeError"


def test_internal_errors_are_hidden_in_production(client, monkeypatch):
    def boom(session):
        raise RuntimeError("db exploded")

    monkeypatch.setattr(products_router.service, "list_products", boom)
    monkeypatch.setattr(get_settings(), "ENVIRONMENT", "production")

    resp = client.get("/api/products/public")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error"}
