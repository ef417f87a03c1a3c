"""Application settings.

Values come from environment variables (or a local ``.env`` file) with
defaults suitable for a single-process development server.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from orderdesk.app.db.models.core_types import CounterBackend


class Settings(BaseSettings):
    """Settings for the order desk service."""

    app_name: str = Field(default="Order Desk", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Database
    database_url: str = Field(default="sqlite:///./orderdesk.db", alias="DATABASE_URL")
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")

    # Order numbers: "memory" for a single process, "database" when several
    # instances issue numbers for the same day
    order_counter_backend: CounterBackend = Field(
        default=CounterBackend.memory,
        alias="ORDER_COUNTER_BACKEND",
    )

    # Required by the reset / clear endpoints. Unset disables them.
    admin_token: str | None = Field(default=None, alias="ADMIN_TOKEN")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def uses_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
