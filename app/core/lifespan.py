import contextlib
from contextlib import asynccontextmanager
import asyncio
from datetime import timedelta
import logging

from app.ai.factory import get_ai_client
from app.core.config import settings
from app.core.session_store import SessionStore, run_periodic_cleanup
from app.core.site_config import get_candidate_name, is_feature_enabled
from app.resume.context import get_resume_context
from app.resume.parser import load_resume
from app.services.chat_service import ChatService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    resume = load_resume()
    get_resume_context()

    chat_enabled = is_feature_enabled("enableChat")
    job_fit_enabled = is_feature_enabled("enableJobFit")
    # ProviderConfigError propagates: never serve AI routes without a provider.
    ai_client = get_ai_client() if (chat_enabled or job_fit_enabled) else None

    store = SessionStore(
        timeout=timedelta(hours=settings.session_timeout_hours),
        max_history=settings.session_max_history,
    )
    app.state.chat_service = ChatService(
        store,
        ai_client,
        candidate_name=get_candidate_name() or resume.contact.name or "the candidate",
        chat_enabled=chat_enabled,
        job_fit_enabled=job_fit_enabled,
    )

    stop_event = asyncio.Event()
    cleanup_task = asyncio.create_task(
        run_periodic_cleanup(store, stop_event, settings.session_cleanup_interval_s)
    )
    logger.info(
        "server_ready environment=%s chat=%s job_fit=%s rate_limit=%s",
        settings.environment,
        chat_enabled,
        job_fit_enabled,
        settings.rate_limit if settings.rate_limit_enabled else "off",
    )
    yield
    stop_event.set()
    if not cleanup_task.done():
        cleanup_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await cleanup_task
    app.state.chat_service = None
