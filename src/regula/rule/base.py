from abc import ABC, abstractmethod
from typing import Any

from .datadef import DEFAULT_NAME, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY
from .facts import Facts

RULE_ATTRIBUTES = ('name', 'description', 'priority')
RULE_METHODS = ('evaluate', 'execute')


def is_rule(obj: Any) -> bool:
    ''' True when the object already exposes the rule capability,
        either by inheritance or structurally. Classes tagged with `@rule`
        are never considered native, they always go through the proxy. '''
    if isinstance(obj, Rule):
        return True

    if hasattr(type(obj), '__rule__'):
        return False

    return all(hasattr(obj, a) for a in RULE_ATTRIBUTES) and \
        all(callable(getattr(obj, m, None)) for m in RULE_METHODS)


def default_compare(rule, other) -> int:
    if rule.priority != other.priority:
        return -1 if rule.priority < other.priority else 1

    if rule.name == other.name:
        return 0

    return -1 if rule.name < other.name else 1


def compare_rules(rule, other) -> int:
    ''' Rule ordering: a `compare_to` provided by the rule wins,
        otherwise (priority, name) ascending. '''
    compare_to = getattr(rule, 'compare_to', None)
    if callable(compare_to):
        return compare_to(other)

    return default_compare(rule, other)


def rule_identity(rule):
    return (rule.name, rule.priority, rule.description)


class Rule(ABC):
    ''' The capability every rule provides to the engine. '''

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def priority(self) -> int:
        pass

    @abstractmethod
    def evaluate(self, facts: Facts) -> bool:
        pass

    @abstractmethod
    def execute(self, facts: Facts) -> None:
        pass

    def compare_to(self, other) -> int:
        return default_compare(self, other)

    def __eq__(self, other):
        if not is_rule(other):
            return NotImplemented

        return rule_identity(self) == rule_identity(other)

    def __hash__(self):
        return hash(rule_identity(self))

    def __lt__(self, other):
        return compare_rules(self, other) < 0

    def __gt__(self, other):
        return compare_rules(self, other) > 0

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self.name!r} priority={self.priority}>"


class BasicRule(Rule):
    ''' Native rule base class. Subclasses override `evaluate` and `execute`. '''

    def __init__(self, name: str = DEFAULT_NAME, description: str = DEFAULT_DESCRIPTION,
                 priority: int = DEFAULT_PRIORITY):
        self._name = name
        self._description = description
        self._priority = priority

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def priority(self) -> int:
        return self._priority

    def evaluate(self, facts: Facts) -> bool:
        return False

    def execute(self, facts: Facts) -> None:
        pass
