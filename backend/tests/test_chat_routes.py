"""End-to-end tests for /api/chat and /api/chat/config."""

import httpx
from fastapi.testclient import TestClient

from conftest import gemini_reply, openai_reply
from relay.config import settings
from relay.main import app

PNG_DATA_URI = "data:image/png;base64,QQ=="


def test_chat_with_default_provider(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "groq-key")
    fake = upstream(lambda request: openai_reply("Hi there!"))
    client = api_client(fake)

    response = client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 200
    assert response.json() == {"message": "Hi there!"}
    sent = fake.requests[0]
    assert sent.url.host == "api.groq.com"
    assert sent.headers["authorization"] == "Bearer groq-key"
    body = fake.json_body()
    assert body["model"] == "llama-3.3-70b-versatile"
    assert body["messages"] == [{"role": "user", "content": "hello"}]


def test_chat_without_credential_names_missing_key(upstream, api_client):
    fake = upstream(lambda request: openai_reply("unused"))
    client = api_client(fake)

    response = client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 500
    assert "GROQ_API_KEY" in response.json()["error"]
    assert fake.requests == []


def test_chat_rejects_empty_input(upstream, api_client):
    client = api_client(upstream(lambda request: openai_reply("unused")))

    response = client.post("/api/chat", json={})

    assert response.status_code == 400
    assert "error" in response.json()


def test_chat_rejects_unknown_model(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "groq-key")
    client = api_client(upstream(lambda request: openai_reply("unused")))

    response = client.post("/api/chat", json={"message": "hi", "modelId": "made-up-model"})

    assert response.status_code == 400
    assert response.json() == {"error": "Unsupported model: made-up-model"}


def test_chat_rejects_unknown_service_type(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "chat_service_type", "mistral")
    client = api_client(upstream(lambda request: openai_reply("unused")))

    response = client.post("/api/chat", json={"message": "hi"})

    assert response.status_code == 400
    assert "mistral" in response.json()["error"]


def test_chat_model_id_selects_service_and_model(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "openai-key")
    fake = upstream(lambda request: openai_reply("from gpt-4o"))
    client = api_client(fake)

    response = client.post("/api/chat", json={"message": "hi", "modelId": "gpt-4o"})

    assert response.status_code == 200
    assert fake.requests[0].url.host == "api.openai.com"
    assert fake.json_body()["model"] == "gpt-4o"


def test_chat_sends_image_to_vision_model(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "gem-key")
    fake = upstream(lambda request: gemini_reply("A small square."))
    client = api_client(fake)

    response = client.post(
        "/api/chat",
        json={"image": PNG_DATA_URI, "modelId": "gemini-1.5-flash"},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "A small square."}
    parts = fake.json_body()["contents"][0]["parts"]
    assert parts == [
        {"text": "请分析这张图片"},
        {"inlineData": {"mimeType": "image/png", "data": "QQ=="}},
    ]


def test_chat_drops_image_for_text_only_model(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "deepseek_api_key", "ds-key")
    fake = upstream(lambda request: openai_reply("Answer"))
    client = api_client(fake)

    response = client.post(
        "/api/chat",
        json={"message": "what is this?", "image": PNG_DATA_URI, "modelId": "deepseek-chat"},
    )

    assert response.status_code == 200
    message = response.json()["message"]
    warning, reply = message.split("\n\n", 1)
    assert warning == (
        "提示：当前使用的 DeepSeek (DeepSeek Chat) 不支持图片识别功能，已忽略图片。"
        "如需使用图片识别，请切换到 Gemini 或 OpenAI GPT-4o 服务。"
    )
    assert reply == "Answer"
    assert fake.json_body()["messages"] == [{"role": "user", "content": "what is this?"}]


def test_chat_provider_failure_returns_500(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "groq-key")
    fake = upstream(lambda request: httpx.Response(200, json={"choices": [{"message": {}}]}))
    client = api_client(fake)

    response = client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "Groq returned an empty message"}


def test_chat_upstream_error_returns_500(upstream, api_client, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", "groq-key")
    client = api_client(upstream(lambda request: httpx.Response(429, json={"error": "rate limited"})))

    response = client.post("/api/chat", json={"message": "hello"})

    assert response.status_code == 500
    assert response.json()["error"].startswith("HTTP 429")


def test_malformed_body_returns_400():
    client = TestClient(app)

    response = client.post("/api/chat", content=b"not json", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_chat_config_for_default_service():
    client = TestClient(app)

    response = client.get("/api/chat/config")

    assert response.status_code == 200
    data = response.json()
    assert data["currentModel"] == "llama-3.3-70b-versatile"
    assert data["serviceType"] == "groq"
    assert data["serviceName"] == "Groq"
    assert data["modelName"] == "Llama 3.3 70B"
    assert data["fileInputSupported"] == False
    assert data["acceptTypes"] == ""
    assert data["supportedImageTypes"] == []
    ids = [m["id"] for m in data["availableModels"]]
    assert "gemini-1.5-flash" in ids
    first = data["availableModels"][0]
    assert set(first) == {
        "id", "name", "serviceType", "serviceName", "description",
        "supportsImage", "supportsDocument", "isFree", "speed",
    }


def test_chat_config_for_gemini(monkeypatch):
    monkeypatch.setattr(settings, "chat_service_type", "gemini")
    client = TestClient(app)

    data = client.get("/api/chat/config").json()

    assert data["currentModel"] == "gemini-1.5-flash"
    assert data["supportsImage"] == True
    assert data["supportsDocument"] == True
    assert "application/pdf" in data["acceptTypes"]


def test_health_lists_configured_providers(monkeypatch):
    monkeypatch.setattr(settings, "gemini_api_key", "gem-key")
    client = TestClient(app)

    response = client.get("/api/health")

    assert response.json() == {
        "status": "healthy",
        "providers": ["gemini"],
        "defaultService": "groq",
    }
