from typing import Dict, Optional

from .base import Rule
from .datadef import EngineParameters
from .facts import Facts
from .listener import ListenerRegistry, RuleListener, RulesEngineListener
from .ruleset import Rules
from . import logger, config

DEBUG_RULE_ENGINE = config.DEBUG_RULE_ENGINE


class RulesEngine(object):
    ''' Fires rules in their natural order, (priority, name) by default.

        Rule level failures (an action raising) are reported to the rule
        listeners and never leave `fire`. Listener errors are not caught.
    '''

    def __init__(self, parameters: Optional[EngineParameters] = None, listeners: ListenerRegistry = None):
        self._parameters = parameters or EngineParameters()
        self._listeners = listeners or ListenerRegistry()

    @property
    def parameters(self) -> EngineParameters:
        return self._parameters

    @property
    def rule_listeners(self):
        return self._listeners.rule_listeners

    @property
    def engine_listeners(self):
        return self._listeners.engine_listeners

    def register_rule_listener(self, *listeners: RuleListener) -> None:
        self._listeners.register_rule_listener(*listeners)

    def unregister_rule_listener(self, listener: RuleListener) -> None:
        self._listeners.unregister_rule_listener(listener)

    def register_engine_listener(self, *listeners: RulesEngineListener) -> None:
        self._listeners.register_engine_listener(*listeners)

    def unregister_engine_listener(self, listener: RulesEngineListener) -> None:
        self._listeners.unregister_engine_listener(listener)

    def fire(self, rules: Rules, facts: Facts) -> None:
        self._listeners.before_rules(rules, facts)
        self._do_fire(rules, facts)
        self._listeners.after_rules(rules, facts)

    def check(self, rules: Rules, facts: Facts) -> Dict[Rule, bool]:
        self._listeners.before_rules(rules, facts)
        result = self._do_check(rules, facts)
        self._listeners.after_rules(rules, facts)
        return result

    def _do_fire(self, rules: Rules, facts: Facts) -> None:  # noqa: C901
        params = self._parameters
        listeners = self._listeners

        DEBUG_RULE_ENGINE and logger.debug('Engine parameters: %s', params)
        DEBUG_RULE_ENGINE and logger.debug('Known facts: %s', facts)

        for rule in rules:
            name, priority = rule.name, rule.priority
            if priority > params.priority_threshold:
                DEBUG_RULE_ENGINE and logger.debug(
                    'Rule priority threshold (%d) exceeded at rule [%s] with priority=%d, next rules will be skipped',
                    params.priority_threshold, name, priority)
                break

            if not listeners.should_evaluate(rule, facts):
                DEBUG_RULE_ENGINE and logger.debug('Rule [%s] has been skipped before being evaluated', name)
                continue

            if not rule.evaluate(facts):
                DEBUG_RULE_ENGINE and logger.debug('Rule [%s] has been evaluated to false', name)
                listeners.after_evaluate(rule, facts, False)
                if params.skip_on_first_non_triggered_rule:
                    DEBUG_RULE_ENGINE and logger.debug(
                        'Next rules will be skipped since parameter skip_on_first_non_triggered_rule is set')
                    break

                continue

            DEBUG_RULE_ENGINE and logger.debug('Rule [%s] triggered', name)
            listeners.after_evaluate(rule, facts, True)
            listeners.before_execute(rule, facts)
            try:
                rule.execute(facts)
            except Exception as error:
                logger.error('Rule [%s] performed with error: %s', name, error)
                listeners.on_failure(rule, facts, error)
                if params.skip_on_first_failed_rule:
                    DEBUG_RULE_ENGINE and logger.debug(
                        'Next rules will be skipped since parameter skip_on_first_failed_rule is set')
                    break

                continue

            DEBUG_RULE_ENGINE and logger.debug('Rule [%s] performed successfully', name)
            listeners.on_success(rule, facts)
            if params.skip_on_first_applied_rule:
                DEBUG_RULE_ENGINE and logger.debug(
                    'Next rules will be skipped since parameter skip_on_first_applied_rule is set')
                break

    def _do_check(self, rules: Rules, facts: Facts) -> Dict[Rule, bool]:
        DEBUG_RULE_ENGINE and logger.debug('Checking rules')
        return {
            rule: rule.evaluate(facts)
            for rule in rules
            if self._listeners.should_evaluate(rule, facts)
        }
