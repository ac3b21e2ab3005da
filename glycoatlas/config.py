from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureOpenAIConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GLYCOATLAS_AZURE_OPENAI__",
        env_file=".env",
        extra="ignore",
    )

    endpoint: str = ""
    api_key: str = ""
    deployment: str = "gpt-4o-mini"
    api_version: str = "2024-12-01-preview"
    max_tokens: int = 8192
    timeout_s: float = 120.0

    @property
    def is_configured(self) -> bool:
        return bool(self.endpoint and self.api_key)


class DashboardConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GLYCOATLAS_DASHBOARD__",
        env_file=".env",
        extra="ignore",
    )

    # Delay before the report section is brought into view after it loads
    focus_delay_s: float = 0.1
    candidate_count: int = 10


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    azure_openai: AzureOpenAIConfig = AzureOpenAIConfig()
    dashboard: DashboardConfig = DashboardConfig()


settings = Settings()
