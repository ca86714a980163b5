from contextlib import asynccontextmanager
import logging

from recrutpro.core.job_board_store import get_job_board_store
from recrutpro.integrations.france_travail import is_configured

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    if not is_configured():
        logger.warning("france_travail_credentials_missing: proxy calls will fail at token exchange")
    store = get_job_board_store()
    yield
    store.close()
