from fastapi import FastAPI

from itr_engine.api.routes import api_router
from itr_engine.api.v1 import v1_router
from itr_engine.config.settings import settings
from itr_engine.core.logging_config import setup_logging

setup_logging()

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

app.include_router(api_router)
app.include_router(v1_router)
