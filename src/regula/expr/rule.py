from typing import List

from regula.rule import BasicRule, Facts, DEFAULT_NAME, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY

from .expression import ExprCondition, ExprAction


class ExprRule(BasicRule):
    '''
    A rule whose condition and actions are Python expressions:

        ExprRule('it rains', priority=1) \\
            .when("rain == True") \\
            .then("umbrella = True")
    '''

    def __init__(self, name: str = DEFAULT_NAME, description: str = DEFAULT_DESCRIPTION,
                 priority: int = DEFAULT_PRIORITY):
        super().__init__(name, description, priority)
        self._condition: ExprCondition = None
        self._actions: List[ExprAction] = []

    def when(self, condition: str) -> 'ExprRule':
        self._condition = ExprCondition(condition)
        return self

    def then(self, action: str) -> 'ExprRule':
        self._actions.append(ExprAction(action))
        return self

    @property
    def condition(self) -> ExprCondition:
        return self._condition

    @property
    def actions(self) -> List[ExprAction]:
        return list(self._actions)

    def evaluate(self, facts: Facts) -> bool:
        if self._condition is None:
            return False

        return self._condition(facts)

    def execute(self, facts: Facts) -> None:
        for action in self._actions:
            action(facts)
