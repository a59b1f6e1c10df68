from typing import Optional

from patientor.models.base import CamelModel


class Diagnosis(CamelModel):
    code: str
    name: str
    latin: Optional[str] = None
