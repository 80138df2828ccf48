# tests/test_config.py

import pytest

from common.config import Settings
from domain.errors import ConfigurationError
from infrastructure.config import AzureConfig, OpenAIConfig


def test_openai_config_builds_url_and_bearer_headers():
    config = OpenAIConfig(api_key="sk-abc", org_id="org-1")

    assert config.url("/chat/completions") == "https://api.openai.com/v1/chat/completions"
    assert config.headers() == [
        ("Authorization", "Bearer sk-abc"),
        ("OpenAI-Organization", "org-1"),
    ]
    assert config.query() == []


def test_openai_config_omits_organization_when_unset():
    config = OpenAIConfig(api_key="sk-abc")
    assert [name for name, _ in config.headers()] == ["Authorization"]


def test_openai_config_with_methods_return_copies():
    base = OpenAIConfig(api_key="sk-abc")
    changed = base.with_api_base("http://localhost:8080/v1/").with_org_id("org-2")

    assert base.api_base == "https://api.openai.com/v1"
    assert base.org_id is None
    assert changed.url("models") == "http://localhost:8080/v1/models"
    assert changed.api_key == "sk-abc"


def test_azure_config_inserts_deployment_and_api_version():
    config = AzureConfig(
        api_base="https://res.openai.azure.com/",
        api_version="2024-02-01",
        deployment_id="gpt4o",
        api_key="azure-key",
    )

    assert (
        config.url("/chat/completions")
        == "https://res.openai.azure.com/openai/deployments/gpt4o/chat/completions"
    )
    assert config.query() == [("api-version", "2024-02-01")]
    assert config.headers() == [("api-key", "azure-key")]


@pytest.mark.parametrize("missing", ["api_base", "api_version", "deployment_id"])
def test_azure_config_requires_gateway_fields(missing):
    values = {
        "api_base": "https://res.openai.azure.com",
        "api_version": "2024-02-01",
        "deployment_id": "gpt4o",
    }
    values[missing] = ""

    with pytest.raises(ConfigurationError):
        AzureConfig(**values)


def test_azure_with_api_version_cannot_clear_version():
    config = AzureConfig(
        api_base="https://res.openai.azure.com", api_version="2024-02-01", deployment_id="d"
    )
    with pytest.raises(ConfigurationError):
        config.with_api_version("")


def test_configs_from_settings(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_ORG_ID", "org-env")
    monkeypatch.setenv("AZURE_OPENAI_API_BASE", "https://env.openai.azure.com")
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "azure-env")
    monkeypatch.setenv("AZURE_OPENAI_DEPLOYMENT_ID", "dep")
    monkeypatch.delenv("AZURE_OPENAI_API_VERSION", raising=False)
    settings = Settings(_env_file=None)

    openai = OpenAIConfig.from_settings(settings)
    assert openai.api_key == "sk-env"
    assert openai.org_id == "org-env"

    # The gateway cannot be built without an API version
    with pytest.raises(ConfigurationError):
        AzureConfig.from_settings(settings)

    monkeypatch.setenv("AZURE_OPENAI_API_VERSION", "2024-02-01")
    azure = AzureConfig.from_settings(Settings(_env_file=None))
    assert azure.query() == [("api-version", "2024-02-01")]
