from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', env_prefix='CYBERSPACE_')

    app_name: str = 'Cyberspace File Manager'
    app_host: str = '127.0.0.1'
    app_port: int = 8080
    root_path: str = '.'
    show_hidden: bool = False
    ignore_dirs: str = ''
    log_level: str = 'info'
    cors_origins: str = ''
    command_timeout_sec: int = Field(default=20, ge=2, le=300)


def parse_ignore_dirs(value: str) -> frozenset[str]:
    return frozenset(name.strip() for name in value.split(',') if name.strip())


settings = Settings()
