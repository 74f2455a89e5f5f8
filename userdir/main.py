import logging
import logging.config
import os

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from userdir.api.api_router import router
from userdir.core.config import settings
from userdir.db.base import engine
from userdir.helpers.exception_handler import (CustomException, fastapi_error_handler, http_exception_handler,
                                               validation_exception_handler)
from userdir.models import Base

if os.path.exists(settings.LOGGING_CONFIG_FILE):
    logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)
else:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        User directory backend with FastAPI + SQLAlchemy
            - List/Create/Update/Delete users
            - Field level validation errors
        '''
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, fastapi_error_handler)

    @application.get("/health")
    async def health_check():
        return {"status": "healthy"}

    for route in application.routes:
        methods = getattr(route, 'methods', None)
        logger.debug(f"Route: {route.path} {methods}")

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
