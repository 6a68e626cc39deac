import logging

import yaml
from fastapi import FastAPI

from parcelstation.infrastructure.config import settings
from parcelstation.infrastructure.database import Database, database as default_database
from parcelstation.presentation.routers import router
from parcelstation.services.parcelstation_service import seed_locker_directory_service

logger = logging.getLogger(__name__)


# Use the contractual schema
def custom_openapi():
    with open(settings.openapi_path) as f:
        return yaml.safe_load(f)


def create_app(database: Database | None = None) -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Parcel Station")
    app.state.database = database or default_database

    @app.on_event("startup")
    def _prepare_store_on_startup() -> None:
        """
        On startup ensure tables exist and seed the locker directory on first run
        """
        if not settings.seed_default_layout:
            app.state.database.create_all()
            return
        result = seed_locker_directory_service(app.state.database)
        logger.info("Station ready (%d lockers created)", result["created"])

    app.openapi = custom_openapi
    app.include_router(router)
    return app


app = create_app()
