import sys
from typing import Optional

from regula.data import DataModel


DEFAULT_NAME = "rule"
DEFAULT_DESCRIPTION = "description"
DEFAULT_PRIORITY = sys.maxsize - 1
DEFAULT_PRIORITY_THRESHOLD = sys.maxsize


class RuleMeta(DataModel):
    ''' Class level metadata attached by the `@rule` decorator '''
    name: Optional[str] = None
    description: Optional[str] = None
    priority: int = DEFAULT_PRIORITY


class ActionMeta(DataModel):
    ''' Attached to a method by the `@action` decorator.
        `seq` records the tagging sequence, used to break ties on `order`. '''
    order: int = 0
    seq: int = 0


class EngineParameters(DataModel):
    priority_threshold: int = DEFAULT_PRIORITY_THRESHOLD
    skip_on_first_applied_rule: bool = False
    skip_on_first_failed_rule: bool = False
    skip_on_first_non_triggered_rule: bool = False
