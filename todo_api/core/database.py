# todo_api/core/database.py
from prisma import Prisma

from todo_api.core.settings import settings


def create_prisma_client() -> Prisma:
    """
    Build the Prisma client used by the ``prisma`` store backend.

    ``DATABASE_URL`` overrides the datasource declared in the schema when set.
    """
    if settings.DATABASE_URL:
        return Prisma(datasource={"url": settings.DATABASE_URL})
    return Prisma()
