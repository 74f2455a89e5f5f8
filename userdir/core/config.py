import os
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'User Directory')
    API_PREFIX: str = os.getenv('API_PREFIX', '/api')
    BACKEND_CORS_ORIGINS: str = os.getenv('BACKEND_CORS_ORIGINS', 'http://localhost:3000')
    DATABASE_URL: str = Field(default='sqlite:///./users.db', validation_alias='SQL_DATABASE_URL')
    HOST: str = os.getenv('HOST', '0.0.0.0')
    PORT: int = int(os.getenv('PORT', '5001'))
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Client side
    API_URL: str = os.getenv('USERDIR_API_URL', 'http://localhost:5001/api')
    API_TIMEOUT_SECONDS: float = float(os.getenv('USERDIR_API_TIMEOUT', '10'))
    DEFAULT_PAGE_SIZE: int = 10

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(',') if origin.strip()]


settings = Settings()
