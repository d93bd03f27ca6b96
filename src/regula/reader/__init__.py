""" Rule definitions loaded from YAML or JSON documents """

from ._meta import config, logger
from .datadef import RuleDefinition
from .reader import RuleDefinitionReader, YamlRuleDefinitionReader, JsonRuleDefinitionReader
from .factory import ExprRuleFactory

__all__ = (
    'config',
    'logger',
    'ExprRuleFactory',
    'JsonRuleDefinitionReader',
    'RuleDefinition',
    'RuleDefinitionReader',
    'YamlRuleDefinitionReader',
)
