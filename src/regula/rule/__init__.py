from ._meta import config, logger
from .datadef import (
    DEFAULT_DESCRIPTION,
    DEFAULT_NAME,
    DEFAULT_PRIORITY,
    DEFAULT_PRIORITY_THRESHOLD,
    EngineParameters,
)
from .facts import Fact, Facts
from .base import Rule, BasicRule, is_rule, compare_rules
from .decorator import rule, condition, action, priority, fact
from .proxy import RuleProxy, as_rule
from .builder import DeclaredRule, RuleBuilder
from .ruleset import Rules
from .listener import ListenerRegistry, RuleListener, RulesEngineListener
from .engine import RulesEngine

__all__ = (
    'config',
    'logger',
    'action',
    'as_rule',
    'BasicRule',
    'compare_rules',
    'condition',
    'DeclaredRule',
    'DEFAULT_DESCRIPTION',
    'DEFAULT_NAME',
    'DEFAULT_PRIORITY',
    'DEFAULT_PRIORITY_THRESHOLD',
    'EngineParameters',
    'fact',
    'Fact',
    'Facts',
    'is_rule',
    'ListenerRegistry',
    'priority',
    'rule',
    'Rule',
    'RuleBuilder',
    'RuleListener',
    'RuleProxy',
    'Rules',
    'RulesEngine',
    'RulesEngineListener',
)
