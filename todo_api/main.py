# todo_api/main.py
import logging

from todo_api.app import create_app
from todo_api.core.container import (
    Container,
    build_memory_container,
    build_prisma_container,
)
from todo_api.core.settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_container() -> Container:
    """Wire stores and services for the configured ``STORE_BACKEND``."""
    if settings.STORE_BACKEND == "prisma":
        from todo_api.core.database import create_prisma_client

        logger.info("Using Prisma store backend")
        return build_prisma_container(create_prisma_client())

    logger.info("Using in-memory store backend")
    return build_memory_container()


app = create_app(build_container())
