from pathlib import Path
from typing import Annotated, List, Optional

import orjson
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


def _split_csv(v: str | List[str]) -> List[str]:
    if isinstance(v, str) and v.startswith('['):
        return [str(i) for i in orjson.loads(v)]
    if isinstance(v, str):
        return [i.strip() for i in v.split(',') if i.strip()]
    if isinstance(v, list):
        return v
    return []


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Admission'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        return _split_csv(v)

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'ticket_admission'
    POSTGRES_PORT: str = '5432'

    # Full async URL override (e.g. sqlite+aiosqlite:///./admission.db)
    DATABASE_URL: Optional[str] = None

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # Ticket credentials
    TICKET_CREDENTIAL_SECRET: SecretStr = SecretStr('test_credential_secret_change_in_production')
    # Retired secrets, still accepted on decode
    TICKET_CREDENTIAL_PREVIOUS_SECRETS: Annotated[List[str], NoDecode] = []
    TICKET_CREDENTIAL_TTL_SECONDS: Optional[int] = None  # None = credentials never expire
    LEGACY_TICKET_NUMBER_PATTERN: str = r'^[A-Z0-9]{3,8}(-[A-Z0-9]{1,16}){1,3}$'
    QR_VALIDATION_BASE_URL: Optional[str] = None

    @field_validator('TICKET_CREDENTIAL_PREVIOUS_SECRETS', mode='before')
    @classmethod
    def assemble_previous_secrets(cls, v: str | List[str]) -> List[str]:
        return _split_csv(v)

    # Ticket issuance
    TICKET_NUMBER_PREFIX_LENGTH: int = 4
    TICKET_NUMBER_MAX_ATTEMPTS: int = 5


settings = Settings()  # type: ignore
