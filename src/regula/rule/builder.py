from typing import Callable, Iterable, Tuple

from regula.error import RuleDefinitionError

from .base import Rule
from .datadef import DEFAULT_NAME, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY
from .facts import Facts

Condition = Callable[[Facts], bool]
Action = Callable[[Facts], None]


class DeclaredRule(Rule):
    ''' A rule made of a condition callable and an ordered list of action callables. '''

    def __init__(self, condition: Condition, actions: Iterable[Action], name: str = DEFAULT_NAME,
                 description: str = DEFAULT_DESCRIPTION, priority: int = DEFAULT_PRIORITY):
        actions = tuple(actions)
        if not callable(condition):
            raise RuleDefinitionError("R00.130", f"Rule [{name}]: a condition callable is required")

        if not actions:
            raise RuleDefinitionError("R00.131", f"Rule [{name}]: at least one action is required")

        if not all(callable(a) for a in actions):
            raise RuleDefinitionError("R00.132", f"Rule [{name}]: actions must be callables")

        self._condition = condition
        self._actions: Tuple[Action, ...] = actions
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

    @property
    def actions(self) -> Tuple[Action, ...]:
        return self._actions

    def evaluate(self, facts: Facts) -> bool:
        return bool(self._condition(facts))

    def execute(self, facts: Facts) -> None:
        for action in self._actions:
            action(facts)


class RuleBuilder(object):
    '''
    Fluent construction of a DeclaredRule:

        RuleBuilder() \\
            .name('weather rule') \\
            .priority(1) \\
            .when(lambda facts: facts.get('rain')) \\
            .then(lambda facts: print('It rains, take an umbrella!')) \\
            .build()
    '''

    def __init__(self):
        self._name = DEFAULT_NAME
        self._description = DEFAULT_DESCRIPTION
        self._priority = DEFAULT_PRIORITY
        self._condition = None
        self._actions = []

    def name(self, name: str) -> 'RuleBuilder':
        self._name = name
        return self

    def description(self, description: str) -> 'RuleBuilder':
        self._description = description
        return self

    def priority(self, priority: int) -> 'RuleBuilder':
        self._priority = priority
        return self

    def when(self, condition: Condition) -> 'RuleBuilder':
        self._condition = condition
        return self

    def then(self, action: Action) -> 'RuleBuilder':
        self._actions.append(action)
        return self

    def build(self) -> DeclaredRule:
        return DeclaredRule(
            self._condition,
            self._actions,
            name=self._name,
            description=self._description,
            priority=self._priority
        )
