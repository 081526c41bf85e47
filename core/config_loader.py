import yaml
import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, model_validator


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///smartscreen.db"


class LlmConfig(BaseModel):
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    report_model: Optional[str] = None  # Falls back to `model` when unset
    temperature: float = 0.2
    timeout_seconds: float = 60.0
    max_retries: int = 5  # Transient API errors only


class ThresholdConfig(BaseModel):
    """Status buckets: overall >= top_fit is top_fit, >= borderline is borderline."""
    top_fit: float = 80.0
    borderline: float = 60.0

    @model_validator(mode="after")
    def _check_order(self) -> "ThresholdConfig":
        if not (0.0 <= self.borderline <= self.top_fit <= 100.0):
            raise ValueError(
                f"Thresholds must satisfy 0 <= borderline <= top_fit <= 100, "
                f"got borderline={self.borderline}, top_fit={self.top_fit}"
            )
        return self


class ScoringConfig(BaseModel):
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    # Concurrent oracle calls during batch ingestion
    max_concurrency: int = 4


class SessionConfig(BaseModel):
    trial_days: int = 7
    idle_timeout_minutes: int = 15


class StateConfig(BaseModel):
    """Snapshot store namespace (one row per collection under this prefix)."""
    namespace: str = "smartscreen"


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    upload_rate_limit: str = "30/minute"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    state: StateConfig = Field(default_factory=StateConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        data.setdefault('database', {})
        data['database']['url'] = env_db_url

    llm_overrides = {
        'base_url': os.environ.get("LLM_BASE_URL"),
        'api_key': os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY"),
        'model': os.environ.get("LLM_MODEL"),
    }
    for key, value in llm_overrides.items():
        if value:
            if not data.get('llm'):
                data['llm'] = {}
            data['llm'][key] = value

    if os.environ.get("WEB_HOST"):
        data.setdefault('web', {})
        data['web']['host'] = os.environ["WEB_HOST"]
    if os.environ.get("WEB_PORT"):
        data.setdefault('web', {})
        data['web']['port'] = int(os.environ["WEB_PORT"])

    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from a subdirectory), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    return AppConfig(**_apply_env_overrides(data))
