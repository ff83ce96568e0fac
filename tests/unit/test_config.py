"""Unit tests for configuration loading."""

from victoury_mcp.utils.config import default_credentials, load_config, request_timeout


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    for name in ("VICTOURY_API_URL", "VICTOURY_TENANT", "VICTOURY_SESSION_ID", "VICTOURY_API_TIMEOUT", "HTTP_PORT", "MCP_PORT"):
        monkeypatch.delenv(name, raising=False)
    config = load_config(tmp_path / "missing.yaml")
    assert config["victoury"]["api_url"] == "https://api.victoury.com/v2"
    assert config["interfaces"]["http"]["port"] == 3000
    assert config["interfaces"]["sse"]["port"] == 3001
    assert request_timeout(config) == 30.0


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("VICTOURY_API_URL", "https://staging.example.com/v2")
    monkeypatch.setenv("VICTOURY_TENANT", "acme")
    monkeypatch.setenv("VICTOURY_SESSION_ID", "sess-1")
    monkeypatch.setenv("VICTOURY_API_TIMEOUT", "5000")
    monkeypatch.setenv("HTTP_PORT", "8080")
    config = load_config(tmp_path / "missing.yaml")
    assert default_credentials(config) == {
        "base_url": "https://staging.example.com/v2",
        "tenant": "acme",
        "session_id": "sess-1",
    }
    assert request_timeout(config) == 5.0
    assert config["interfaces"]["http"]["port"] == 8080


def test_yaml_file(tmp_path, monkeypatch):
    for name in ("VICTOURY_TENANT", "VICTOURY_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "server_config.yaml"
    path.write_text("victoury:\n  tenant: from-file\n  timeout_seconds: 12\n", encoding="utf-8")
    config = load_config(path)
    assert config["victoury"]["tenant"] == "from-file"
    assert request_timeout(config) == 12.0
