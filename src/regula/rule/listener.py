from typing import Iterable, List, Tuple


class RuleListener(object):
    ''' Observer of a single rule being evaluated and executed.
        `before_evaluate` is a gate: returning False skips the rule. '''

    def before_evaluate(self, rule, facts) -> bool:
        return True

    def after_evaluate(self, rule, facts, evaluation_result: bool) -> None:
        pass

    def before_execute(self, rule, facts) -> None:
        pass

    def on_success(self, rule, facts) -> None:
        pass

    def on_failure(self, rule, facts, error: Exception) -> None:
        pass


class RulesEngineListener(object):
    ''' Observer of a whole fire/check call. '''

    def before_evaluate(self, rules, facts) -> None:
        pass

    def after_execute(self, rules, facts) -> None:
        pass


class ListenerRegistry(object):
    def __init__(self, rule_listeners: Iterable[RuleListener] = (),
                 engine_listeners: Iterable[RulesEngineListener] = ()):
        self._rule_listeners: List[RuleListener] = list(rule_listeners)
        self._engine_listeners: List[RulesEngineListener] = list(engine_listeners)

    @property
    def rule_listeners(self) -> Tuple[RuleListener, ...]:
        return tuple(self._rule_listeners)

    @property
    def engine_listeners(self) -> Tuple[RulesEngineListener, ...]:
        return tuple(self._engine_listeners)

    def register_rule_listener(self, *listeners: RuleListener) -> None:
        self._rule_listeners.extend(listeners)

    def unregister_rule_listener(self, listener: RuleListener) -> None:
        if listener in self._rule_listeners:
            self._rule_listeners.remove(listener)

    def register_engine_listener(self, *listeners: RulesEngineListener) -> None:
        self._engine_listeners.extend(listeners)

    def unregister_engine_listener(self, listener: RulesEngineListener) -> None:
        if listener in self._engine_listeners:
            self._engine_listeners.remove(listener)

    def should_evaluate(self, rule, facts) -> bool:
        # Every gate is consulted until one vetoes
        return all(lsn.before_evaluate(rule, facts) for lsn in self._rule_listeners)

    def after_evaluate(self, rule, facts, result: bool) -> None:
        for lsn in self._rule_listeners:
            lsn.after_evaluate(rule, facts, result)

    def before_execute(self, rule, facts) -> None:
        for lsn in self._rule_listeners:
            lsn.before_execute(rule, facts)

    def on_success(self, rule, facts) -> None:
        for lsn in self._rule_listeners:
            lsn.on_success(rule, facts)

    def on_failure(self, rule, facts, error: Exception) -> None:
        for lsn in self._rule_listeners:
            lsn.on_failure(rule, facts, error)

    def before_rules(self, rules, facts) -> None:
        for lsn in self._engine_listeners:
            lsn.before_evaluate(rules, facts)

    def after_rules(self, rules, facts) -> None:
        for lsn in self._engine_listeners:
            lsn.after_execute(rules, facts)
