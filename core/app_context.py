from dataclasses import dataclass
from typing import Optional

from redis import Redis
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.cache import CacheService
from core.config_loader import AppConfig, LlmConfig
from core.llm.openai_service import OpenAIService
from core.monitoring import ErrorReporter, LoggingErrorReporter
from core.pipeline.orchestrator import ScoringOrchestrator
from core.scorer import AIScorer
from database.database import build_engine, build_session_factory
from notification.channels import EmailChannel
from notification.dispatcher import TaskDispatcher
from notification.triggers import NotificationTriggers
from notification.tasks import configure_tasks


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Built once per process and injected; nothing below reads config or
    environment on its own. DB access goes through ats_uow(session_factory).
    """
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    cache: CacheService
    error_reporter: ErrorReporter
    scorer: AIScorer
    dispatcher: TaskDispatcher
    triggers: NotificationTriggers
    orchestrator: ScoringOrchestrator

    @classmethod
    def build(
        cls,
        config: AppConfig,
        engine: Optional[Engine] = None,
        redis_client: Optional[Redis] = None,
        dispatcher: Optional[TaskDispatcher] = None
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration
            engine: Optional pre-built engine (tests pass an in-memory SQLite one)
            redis_client: Optional pre-built Redis client for the cache
            dispatcher: Optional pre-built dispatcher

        Returns:
            Fully wired AppContext instance
        """
        error_reporter = LoggingErrorReporter()

        engine = engine or build_engine(config.database.url, echo=config.database.echo)
        session_factory = build_session_factory(engine)

        cache = cls._build_cache(config, redis_client)

        llm_reviewer = cls._build_llm_reviewer(config.llm) if config.llm.enabled else None
        scorer = AIScorer(
            cache=cache if config.cache.enabled and config.scoring.use_cache else None,
            llm_reviewer=llm_reviewer,
            site_url=config.scoring.site_url,
            scores_ttl=config.cache.ai_scores_ttl_seconds
        )

        if dispatcher is None:
            dispatcher = cls._build_dispatcher(config, error_reporter)

        triggers = cls._build_triggers(config, session_factory, error_reporter)
        # Tasks run inline or in a worker resolve triggers through this registration
        configure_tasks(triggers)

        orchestrator = ScoringOrchestrator(
            session_factory=session_factory,
            scorer=scorer,
            dispatcher=dispatcher if config.notifications.enabled else None,
            error_reporter=error_reporter,
            default_threshold=config.scoring.default_shortlist_threshold
        )

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            cache=cache,
            error_reporter=error_reporter,
            scorer=scorer,
            dispatcher=dispatcher,
            triggers=triggers,
            orchestrator=orchestrator
        )

    @staticmethod
    def _build_cache(config: AppConfig, redis_client: Optional[Redis] = None) -> CacheService:
        return CacheService(
            redis_client=redis_client,
            redis_url=config.redis.url,
            password=config.redis.password,
            default_ttl=config.cache.default_ttl_seconds
        )

    @staticmethod
    def _build_llm_reviewer(llm_config: LlmConfig) -> OpenAIService:
        """Build OpenAI service from LLM configuration."""
        return OpenAIService(
            api_key=llm_config.api_key,
            base_url=llm_config.base_url,
            model=llm_config.model,
            temperature=llm_config.temperature,
            timeout_seconds=llm_config.timeout_seconds
        )

    @staticmethod
    def _build_dispatcher(config: AppConfig, error_reporter: ErrorReporter) -> TaskDispatcher:
        notification_config = config.notifications
        return TaskDispatcher(
            redis_url=config.redis.url,
            use_async_queue=notification_config.use_async_queue,
            queue_name=notification_config.queue_name,
            error_reporter=error_reporter
        )

    @staticmethod
    def _build_triggers(
        config: AppConfig,
        session_factory: sessionmaker,
        error_reporter: ErrorReporter
    ) -> NotificationTriggers:
        email_config = config.email
        channel = EmailChannel(
            api_key=email_config.api_key,
            from_email=email_config.from_email,
            api_url=email_config.api_url,
            timeout=email_config.request_timeout_seconds,
            dry_run=email_config.dry_run
        )
        return NotificationTriggers(
            session_factory=session_factory,
            channel=channel,
            base_url=config.notifications.base_url,
            error_reporter=error_reporter
        )
