from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import sessionmaker

from core.assistant_service import AssistantService
from core.auth_service import AuthService
from core.config_loader import AppConfig, LlmConfig
from core.llm.interfaces import LLMProvider
from core.llm.openai_service import OpenAIService
from core.llm.oracle import OracleClient
from core.report_service import ReportService
from core.scorer import ScoringService, ThresholdPolicy
from core.screening_service import ScreeningService
from core.state.app_state import AppState
from core.tailoring_service import TailoringService
from database.database import init_db, make_session_factory
from database.snapshot import SnapshotStore
from etl.ingestion import IngestionService


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Single source of truth for service instantiation; both the CLI and the
    web app build one at startup.
    """
    config: AppConfig
    session_factory: sessionmaker
    oracle: OracleClient
    state: AppState
    auth: AuthService
    screening: ScreeningService

    @classmethod
    def build(
        cls,
        config: AppConfig,
        provider: Optional[LLMProvider] = None,
        session_factory: Optional[sessionmaker] = None,
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            provider: Oracle backend; defaults to OpenAIService from ``config.llm``
            session_factory: Database sessions; defaults to ``config.database.url``

        Returns:
            Fully wired AppContext with state already loaded
        """
        if session_factory is None:
            session_factory = make_session_factory(config.database.url)
        init_db(session_factory)

        oracle = OracleClient(
            provider or cls._build_ai_service(config.llm),
            report_model=config.llm.report_model,
        )

        state = AppState(SnapshotStore(session_factory), namespace=config.state.namespace, ai_model=config.llm.model)
        state.load()

        screening = ScreeningService(
            state=state,
            ingestion=IngestionService(oracle),
            scoring=ScoringService(oracle, ThresholdPolicy.from_config(config.scoring.thresholds)),
            tailoring=TailoringService(oracle),
            reports=ReportService(oracle),
            assistant=AssistantService(oracle),
            max_concurrency=config.scoring.max_concurrency,
        )

        return cls(
            config=config,
            session_factory=session_factory,
            oracle=oracle,
            state=state,
            auth=AuthService(session_factory, config.session),
            screening=screening,
        )

    @staticmethod
    def _build_ai_service(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model=llm_config.model,
            temperature=llm_config.temperature,
            timeout_seconds=llm_config.timeout_seconds,
            max_retries=llm_config.max_retries,
        )
