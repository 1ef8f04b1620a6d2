"""
Entry point for running the service as a module: python -m qjwt.service
"""
import uvicorn

from .config import settings
from .main import create_app, setup_logging

if __name__ == "__main__":
    setup_logging()
    uvicorn.run(create_app(), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
