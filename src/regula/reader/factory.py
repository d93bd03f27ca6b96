from regula.error import RuleDefinitionError
from regula.expr import ExprRule
from regula.rule import Rules

from .datadef import RuleDefinition
from .reader import RuleDefinitionReader, Source, YamlRuleDefinitionReader


class ExprRuleFactory(object):
    ''' Build expression rules out of rule definition files.

        rules = ExprRuleFactory(JsonRuleDefinitionReader()).create_rules('rules.json')
    '''

    def __init__(self, reader: RuleDefinitionReader = None):
        self._reader = reader or YamlRuleDefinitionReader()

    @property
    def reader(self) -> RuleDefinitionReader:
        return self._reader

    def create_rule(self, source: Source) -> ExprRule:
        definitions = self._reader.read(source)
        if len(definitions) != 1:
            raise RuleDefinitionError(
                "R00.146", f"Expected exactly one rule definition, found {len(definitions)}")

        return self.build(definitions[0])

    def create_rules(self, source: Source) -> Rules:
        return Rules(*(self.build(d) for d in self._reader.read(source)))

    @staticmethod
    def build(definition: RuleDefinition) -> ExprRule:
        rule = ExprRule(definition.name, definition.description, definition.priority)
        rule.when(definition.condition)
        for action in definition.actions:
            rule.then(action)

        return rule
