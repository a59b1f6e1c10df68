import datetime
import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _check_iso_date(value: str) -> str:
    if not _ISO_DATE_RE.fullmatch(value):
        raise ValueError("Invalid date, expected YYYY-MM-DD")
    try:
        datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date, {value} is not a calendar day") from None
    return value


# Kept as the submitted string so records round-trip unchanged.
IsoDate = Annotated[str, AfterValidator(_check_iso_date)]


class CamelModel(BaseModel):
    """Base for every wire model: camelCase on the wire, no unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="forbid",
    )
