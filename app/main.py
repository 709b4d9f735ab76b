from fastapi import FastAPI
import logging

from app.api.routes import router
from app.config import settings_from_env
from app.dataset.startup import load_dataset_for_app

app = FastAPI(title="mindustry-mods", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@app.on_event("startup")
async def _startup() -> None:
    await load_dataset_for_app(settings_from_env())
