from typing import List

from pydantic import Field

from regula.data import DataModel
from regula.rule import DEFAULT_NAME, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY


class RuleDefinition(DataModel):
    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION
    priority: int = DEFAULT_PRIORITY
    condition: str
    actions: List[str] = Field(min_length=1)
