import logging

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from server import Settings, configure_logging, create_app


@pytest.fixture
def static_dir(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Old Phone Pad</h1>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def client(static_dir):
    return TestClient(create_app(Settings(static_dir=static_dir)))


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"input": "4433555 555666#"}, "HELLO"),
        ({"input": "227*#"}, "B"),
        ({"input": ""}, ""),
        ({"input": None}, ""),
        ({"Input": "33#"}, "E"),
        ({}, ""),
    ],
)
def test_decode_endpoint(client, payload, expected):
    response = client.post("/decode", json=payload)
    assert response.status_code == 200
    assert response.json() == {"decoded": expected}


@pytest.mark.parametrize("payload", [["33#"], {"input": 33}, "33#"])
def test_decode_endpoint_rejects_malformed_payload(client, payload):
    response = client.post("/decode", json=payload)
    assert response.status_code == 422


def test_index_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "Old Phone Pad" in response.text


def test_static_assets_are_served(client):
    response = client.get("/static/index.html")
    assert response.status_code == 200
    assert "Old Phone Pad" in response.text


def test_decode_endpoint_rejects_wrong_method(client):
    assert client.get("/decode").status_code == 405


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_app_without_static_dir(tmp_path):
    client = TestClient(create_app(Settings(static_dir=tmp_path / "missing")))
    assert client.get("/").status_code == 404
    assert client.post("/decode", json={"input": "33#"}).json() == {"decoded": "E"}


def test_bundled_front_end_is_served():
    client = TestClient(create_app(Settings()))
    response = client.get("/")
    assert response.status_code == 200
    assert "/decode" in response.text


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("OLDPHONEPAD_PORT", "9000")
    monkeypatch.setenv("OLDPHONEPAD_LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"


def test_settings_reject_bad_values():
    with pytest.raises(ValidationError):
        Settings(port=0)
    with pytest.raises(ValidationError):
        Settings(log_level="loud")


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging(root_logger):
    root_logger.addHandler(logging.NullHandler())

    configure_logging("DEBUG")

    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], logging.StreamHandler)
    assert root_logger.level == logging.DEBUG
