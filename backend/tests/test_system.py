def test_root(client):
    data = client.get("/").json()
    assert data["message"] == "Wingman API"


def test_health(client):
    assert client.get("/api/system/health").json() == {
        "status": "ok",
        "version": "0.1.0",
        "dependencies": {},
    }


def test_personalities_hide_system_prompts(client):
    personalities = client.get("/api/personalities").json()
    assert {p["id"] for p in personalities} >= {"confident", "playful"}
    assert all(set(p) == {"id", "name", "description"} for p in personalities)


def test_models_catalog(client):
    models = client.get("/api/models").json()
    assert all(m["isFree"] for m in models["free"])
    assert not any(m["isFree"] for m in models["paid"])
    assert "openai/gpt-4o" in {m["id"] for m in models["paid"]}
