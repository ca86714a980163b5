import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from recrutpro.api.france_travail import router as france_travail_router
from recrutpro.api.v1.health import router as health_router
from recrutpro.api.v1.ads import router as ads_router
from recrutpro.api.v1.jobs import router as jobs_router
from recrutpro.api.v1.market import router as market_router
from recrutpro.core.cors import cors_allow_origin_regex, cors_allowed_origins
from recrutpro.core.rate_limit import limiter
from recrutpro.core.config import settings
from dotenv import load_dotenv
from recrutpro.core.lifespan import lifespan

load_dotenv()
logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

# The France Travail proxy stays on the root app, outside CORSMiddleware; it sets its own headers.
api = FastAPI(title="RecrutPro API", version="0.1.0")

api.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
api.state.limiter = limiter
api.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
api.add_middleware(SlowAPIMiddleware)

api.include_router(health_router, tags=["Health"])
api.include_router(ads_router, tags=["Ads"])
api.include_router(jobs_router, tags=["Job board"])
api.include_router(market_router, tags=["Market"])

app = FastAPI(title="RecrutPro", version="0.1.0", lifespan=lifespan)
app.include_router(france_travail_router)
app.mount("/v1", api)
