# infrastructure/config.py
# -----------------------------------------------------------------------------
# Backend configurations. Both are frozen values: `with_*` returns a modified
# copy so a client can be shared across tasks without hidden mutable state.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from common.config import Settings, get_settings
from domain.contracts.i_config import IConfig
from domain.errors import ConfigurationError

OPENAI_API_BASE = "https://api.openai.com/v1"
OPENAI_ORGANIZATION_HEADER = "OpenAI-Organization"
AZURE_API_KEY_HEADER = "api-key"


@dataclass(frozen=True)
class OpenAIConfig(IConfig):
    """Default OpenAI service: bearer auth, `<api_base><path>` URLs."""

    api_key: str = field(default="", repr=False)
    api_base: str = OPENAI_API_BASE
    org_id: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> OpenAIConfig:
        settings = settings or get_settings()
        return cls(
            api_key=settings.openai_api_key,
            api_base=settings.openai_api_base or OPENAI_API_BASE,
            org_id=settings.openai_org_id or None,
        )

    def with_api_key(self, api_key: str) -> OpenAIConfig:
        return replace(self, api_key=api_key)

    def with_api_base(self, api_base: str) -> OpenAIConfig:
        return replace(self, api_base=api_base)

    def with_org_id(self, org_id: str) -> OpenAIConfig:
        return replace(self, org_id=org_id)

    def url(self, path: str) -> str:
        return f"{self.api_base.rstrip('/')}/{path.lstrip('/')}"

    def headers(self) -> List[Tuple[str, str]]:
        headers = [("Authorization", f"Bearer {self.api_key}")]
        if self.org_id:
            headers.append((OPENAI_ORGANIZATION_HEADER, self.org_id))
        return headers

    def query(self) -> List[Tuple[str, str]]:
        return []


@dataclass(frozen=True)
class AzureConfig(IConfig):
    """
    Azure OpenAI gateway.

    URL: `<api_base>/openai/deployments/<deployment_id><path>?api-version=<ver>`,
    auth via the `api-key` header. Both `api_version` and `deployment_id` are
    required; a missing one fails at construction with ConfigurationError.
    """

    api_base: str
    api_version: str
    deployment_id: str
    api_key: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self.api_base:
            raise ConfigurationError("Azure configuration requires an api_base")
        if not self.api_version:
            raise ConfigurationError("Azure configuration requires an api_version")
        if not self.deployment_id:
            raise ConfigurationError("Azure configuration requires a deployment_id")

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> AzureConfig:
        settings = settings or get_settings()
        return cls(
            api_base=settings.azure_openai_api_base,
            api_version=settings.azure_openai_api_version or "",
            deployment_id=settings.azure_openai_deployment_id or "",
            api_key=settings.azure_openai_api_key,
        )

    def with_api_key(self, api_key: str) -> AzureConfig:
        return replace(self, api_key=api_key)

    def with_api_base(self, api_base: str) -> AzureConfig:
        return replace(self, api_base=api_base)

    def with_api_version(self, api_version: str) -> AzureConfig:
        return replace(self, api_version=api_version)

    def with_deployment_id(self, deployment_id: str) -> AzureConfig:
        return replace(self, deployment_id=deployment_id)

    def url(self, path: str) -> str:
        base = self.api_base.rstrip("/")
        return f"{base}/openai/deployments/{self.deployment_id}/{path.lstrip('/')}"

    def headers(self) -> List[Tuple[str, str]]:
        return [(AZURE_API_KEY_HEADER, self.api_key)]

    def query(self) -> List[Tuple[str, str]]:
        return [("api-version", self.api_version)]
