"""
Environment-driven connection settings

Every field can be overridden with a ``CAYLEY_``-prefixed environment
variable, e.g. ``CAYLEY_HOST=db.internal CAYLEY_PORT=64211``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CayleySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CAYLEY_", extra="ignore")

    host: str = "localhost"
    port: int = 64210
    api_version: str = "v1"
    scheme: str = "http"
    timeout: float = 30.0


__all__ = ['CayleySettings']
