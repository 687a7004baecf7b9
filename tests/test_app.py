import io

import pytest

from chef import Chef
from config import config
from errors import AuthenticationError, NetworkError, ValidationError
from ui import app as app_module


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as client:
        yield client


@pytest.fixture
def use_provider(monkeypatch):
    def _use(provider):
        monkeypatch.setattr(app_module, "get_chef", lambda: Chef(provider))
    return _use


def _upload(client, data=b"img", mimetype="image/png", **form):
    form["image"] = (io.BytesIO(data), "recipe.png", mimetype)
    return client.post("/api/extract", data=form, content_type="multipart/form-data")


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_extract_returns_text_and_image(client, use_provider, fake_provider_cls, pancake_json, dish_image):
    use_provider(fake_provider_cls(answer=pancake_json, image=dish_image))

    resp = _upload(client)

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["recipe"]["name"] == "Pancakes"
    assert body["text"].startswith("Pancakes")
    assert body["dish_image"]["data_url"] == "data:image/jpeg;base64,aW1hZ2U="
    assert body["dish_image_error"] is None


def test_extract_json_format_skips_text(client, use_provider, fake_provider_cls, pancake_json):
    use_provider(fake_provider_cls(answer=pancake_json))

    resp = _upload(client, format="tandoorJson", generate_image="false")

    body = resp.get_json()
    assert resp.status_code == 200
    assert "text" not in body
    assert body["dish_image"] is None
    assert body["dish_image_error"] is None


def test_extract_requires_image(client):
    resp = client.post("/api/extract", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400


def test_extract_rejects_unsupported_type(client):
    resp = _upload(client, mimetype="application/pdf")

    assert resp.status_code == 400
    assert "Unsupported image type" in resp.get_json()["error"]


def test_extract_failure_is_bad_gateway(client, use_provider, fake_provider_cls):
    use_provider(fake_provider_cls(error=RuntimeError("model down")))

    resp = _upload(client)

    assert resp.status_code == 502
    assert resp.get_json()["error"] == "Failed to extract recipe via AI: model down"


def test_format_endpoint(client):
    resp = client.post("/api/format", json={"recipe": {"name": "No Recipe Found"}})

    assert resp.get_json() == {"text": "No recipe could be identified in the image."}


def test_export_success(client, monkeypatch):
    calls = []
    monkeypatch.setattr(app_module, "export_to_tandoor", lambda url, key, recipe: calls.append((url, key, recipe)))

    resp = client.post("/api/export", json={
        "recipe": {"name": "Toast"},
        "tandoor_url": "https://recipes.example.com",
        "api_key": "key",
    })

    assert resp.status_code == 200
    assert resp.get_json()["message"] == 'Recipe "Toast" successfully exported to Tandoor!'
    assert calls[0][0] == "https://recipes.example.com"
    assert calls[0][2].name == "Toast"


def test_export_requires_url_and_key(client, monkeypatch):
    monkeypatch.delenv("TANDOOR_HOST", raising=False)
    monkeypatch.delenv("TANDOOR_API_KEY", raising=False)

    resp = client.post("/api/export", json={"recipe": {"name": "Toast"}})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Please enter both Tandoor URL and API Key."


def test_export_picks_up_changed_environment(client, monkeypatch):
    # Registered first so teardown restores the values reload() overwrites
    monkeypatch.setattr(config, "TANDOOR_HOST", config.TANDOOR_HOST)
    monkeypatch.setattr(config, "TANDOOR_API_KEY", config.TANDOOR_API_KEY)
    monkeypatch.setenv("TANDOOR_HOST", "https://env.example.com")
    monkeypatch.setenv("TANDOOR_API_KEY", "env-key")
    calls = []
    monkeypatch.setattr(app_module, "export_to_tandoor", lambda url, key, recipe: calls.append((url, key)))

    resp = client.post("/api/export", json={"recipe": {"name": "Toast"}})

    assert resp.status_code == 200
    assert calls == [("https://env.example.com", "env-key")]


def test_export_invalid_url(client):
    resp = client.post("/api/export", json={
        "recipe": {"name": "Toast"},
        "tandoor_url": "ftp://x",
        "api_key": "key",
    })

    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("Export failed: Invalid Tandoor URL")


@pytest.mark.parametrize("error, status", [
    (AuthenticationError("Authentication failed."), 401),
    (ValidationError("Invalid recipe data.", detail="name: too long"), 422),
    (NetworkError("unreachable"), 502),
])
def test_export_error_statuses(client, monkeypatch, error, status):
    def fail(url, key, recipe):
        raise error

    monkeypatch.setattr(app_module, "export_to_tandoor", fail)

    resp = client.post("/api/export", json={
        "recipe": {"name": "Toast"},
        "tandoor_url": "https://recipes.example.com",
        "api_key": "key",
    })

    assert resp.status_code == status
    assert resp.get_json()["error"] == f"Export failed: {error.message}"
