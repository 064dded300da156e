import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lexicon_dbi.app.api.v1.api import api_router
from lexicon_dbi.app.core.config import settings
from lexicon_dbi.app.core.i18n import init_i18n
from lexicon_dbi.app.middleware.language import LanguageMiddleware

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Lexicons are fully loaded before the first request is accepted
    app.state.i18n = init_i18n(settings)
    yield


app = FastAPI(title="Lexicon DBI", lifespan=lifespan)

app.add_middleware(LanguageMiddleware)

app.include_router(api_router)
