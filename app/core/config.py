from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_name: str = "stage-pipeline-service"
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-sonnet-4-20250514"
    anthropic_max_tokens: int = 4000

    github_token: str | None = None
    github_api_base: str = "https://api.github.com"
    github_web_base: str = "https://github.com"

    notion_token: str | None = None
    notion_root_page: str | None = None
    notion_api_base: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"

    dashboard_base_url: str = "http://localhost:3000"

    http_timeout_seconds: float = 60.0

settings = Settings()
