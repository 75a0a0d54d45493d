import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager

from jobfit.analytics.db import init_db
from jobfit.analytics.tracker import track_analysis
from jobfit.core.config import settings
from jobfit.services.analysis_cache import ResultCache
from jobfit.services.analysis_engine import MatchingEngine
from jobfit.storage.profile_store import ProfileStore
from jobfit.taxonomy import get_default_synonym_index

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    init_db()
    usage_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="jobfit-usage")
    app.state.engine = MatchingEngine(
        synonym_index=get_default_synonym_index(),
        cache=ResultCache(max_size=settings.analysis_cache_size),
        usage_recorder=track_analysis if settings.statistics_enabled else None,
        usage_executor=usage_executor,
    )
    app.state.profile_store = ProfileStore(settings.profile_store_db_path)
    logger.info(
        "jobfit_started cache_size=%s statistics_enabled=%s",
        settings.analysis_cache_size,
        settings.statistics_enabled,
    )
    yield
    usage_executor.shutdown(wait=True)
    app.state.profile_store.close()
