import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from jobfit.api.v1.health import router as health_router
from jobfit.api.v1.analysis import router as analysis_router
from jobfit.api.v1.profiles import router as profiles_router
from jobfit.api.v1.statistics import router as statistics_router
from jobfit.core.cors import cors_options
from jobfit.core.rate_limit import limiter
from jobfit.core.config import settings
from dotenv import load_dotenv
from jobfit.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Jobfit Matching API", version="0.1.0", lifespan=lifespan)

app.add_middleware(CORSMiddleware, **cors_options())
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(analysis_router, prefix="/v1", tags=["Analysis"])
app.include_router(profiles_router, prefix="/v1", tags=["Profiles"])
app.include_router(statistics_router, prefix="/v1", tags=["Statistics"])
