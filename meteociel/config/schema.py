"""Pydantic v2 configuration schema with strict validation."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from meteociel.models.forecast import ColumnFailurePolicy, ForecastVariant

METEOCIEL_BASE_URL = "https://www.meteociel.fr"
DEFAULT_USER_AGENT = "meteociel-scraper/0.1.0"


class ClientConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = METEOCIEL_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=30.0, gt=0.0)


class ParserConfig(BaseModel):
    model_config = {"extra": "forbid"}

    column_failure_policy: ColumnFailurePolicy = ColumnFailurePolicy.ABORT_ROW
    html_parser: Literal["lxml", "html.parser"] = "lxml"


class MeteocielConfig(BaseModel):
    model_config = {"extra": "forbid"}

    client: ClientConfig = ClientConfig()
    parser: ParserConfig = ParserConfig()
    default_variant: ForecastVariant = ForecastVariant.GFS

    @field_validator("default_variant", mode="before")
    @classmethod
    def _variant_by_name(cls, value):
        # Accept "arome-1h" as well as the raw path template
        if isinstance(value, str) and not value.startswith("/"):
            return ForecastVariant.from_cli_name(value)
        return value
