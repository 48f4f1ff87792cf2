from fastapi import FastAPI

from api.router import router as detect_router
from logging_config import configure_logging

configure_logging()

app = FastAPI()
app.include_router(detect_router)
