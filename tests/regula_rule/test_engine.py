import pytest

from regula.rule import (
    BasicRule,
    EngineParameters,
    Facts,
    Rules,
    RulesEngine,
    RuleListener,
    RulesEngineListener,
    action,
    condition,
    fact,
    rule,
)


class SampleRule(BasicRule):
    ''' Records its evaluations and executions in a shared journal '''

    def __init__(self, name, priority, journal, matches=True, error=None):
        super().__init__(name, f"sample rule {name}", priority)
        self.journal = journal
        self.matches = matches
        self.error = error

    def evaluate(self, facts):
        self.journal.append(('evaluate', self.name))
        return self.matches

    def execute(self, facts):
        self.journal.append(('execute', self.name))
        if self.error:
            raise self.error


class RecordingListener(RuleListener):
    def __init__(self, journal, veto=()):
        self.journal = journal
        self.veto = veto

    def before_evaluate(self, rule, facts):
        self.journal.append(('before_evaluate', rule.name))
        return rule.name not in self.veto

    def after_evaluate(self, rule, facts, evaluation_result):
        self.journal.append(('after_evaluate', rule.name, evaluation_result))

    def before_execute(self, rule, facts):
        self.journal.append(('before_execute', rule.name))

    def on_success(self, rule, facts):
        self.journal.append(('on_success', rule.name))

    def on_failure(self, rule, facts, error):
        self.journal.append(('on_failure', rule.name, str(error)))


class RecordingEngineListener(RulesEngineListener):
    def __init__(self, journal):
        self.journal = journal

    def before_evaluate(self, rules, facts):
        self.journal.append(('before_rules', len(rules)))

    def after_execute(self, rules, facts):
        self.journal.append(('after_rules', len(rules)))


@pytest.fixture
def journal():
    return []


def executed(journal):
    return [entry[1] for entry in journal if entry[0] == 'execute']


def evaluated(journal):
    return [entry[1] for entry in journal if entry[0] == 'evaluate']


def test_fire_all_matching_rules_in_order(journal):
    r2 = SampleRule('r2', 2, journal)
    r1 = SampleRule('r1', 1, journal)

    RulesEngine().fire(Rules(r2, r1), Facts())

    assert executed(journal) == ['r1', 'r2']


def test_skip_on_first_applied_rule(journal):
    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 2, journal))
    engine = RulesEngine(EngineParameters(skip_on_first_applied_rule=True))

    engine.fire(rules, Facts())

    assert executed(journal) == ['r1']


def test_skip_on_first_applied_rule_with_failure(journal):
    rules = Rules(
        SampleRule('r1', 1, journal, error=RuntimeError('fatal error!')),
        SampleRule('r2', 2, journal)
    )
    engine = RulesEngine(EngineParameters(skip_on_first_applied_rule=True))

    engine.fire(rules, Facts())

    assert executed(journal) == ['r1', 'r2']


def test_failed_rule_does_not_block_next_rules(journal):
    rules = Rules(
        SampleRule('r1', 1, journal, error=RuntimeError('fatal error!')),
        SampleRule('r2', 2, journal)
    )

    RulesEngine().fire(rules, Facts())

    assert executed(journal) == ['r1', 'r2']


def test_skip_on_first_failed_rule(journal):
    rules = Rules(
        SampleRule('r1', 1, journal, error=RuntimeError('fatal error!')),
        SampleRule('r2', 2, journal)
    )
    engine = RulesEngine(EngineParameters(skip_on_first_failed_rule=True))

    engine.fire(rules, Facts())

    assert executed(journal) == ['r1']
    assert evaluated(journal) == ['r1']


def test_skip_on_first_non_triggered_rule(journal):
    rules = Rules(SampleRule('r1', 1, journal, matches=False), SampleRule('r2', 2, journal))
    engine = RulesEngine(EngineParameters(skip_on_first_non_triggered_rule=True))

    engine.fire(rules, Facts())

    assert evaluated(journal) == ['r1']
    assert executed(journal) == []


def test_priority_threshold_is_a_hard_cutoff(journal):
    ''' r3 has priority 5 > threshold 4, so r3 and everything after it
        is skipped, even a rule whose own priority is within threshold '''

    def ordered_by_name(rule, other):
        return (rule.name > other.name) - (rule.name < other.name)

    rules = Rules(
        SampleRule('r1', 1, journal),
        SampleRule('r3', 5, journal),
        SampleRule('r4', 2, journal),
        comparator=ordered_by_name
    )
    engine = RulesEngine(EngineParameters(priority_threshold=4))

    engine.fire(rules, Facts())

    assert evaluated(journal) == ['r1']
    assert executed(journal) == ['r1']


def test_threshold_skipped_rules_never_reach_listeners(journal):
    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 10, journal))
    engine = RulesEngine(EngineParameters(priority_threshold=1))
    engine.register_rule_listener(RecordingListener(journal))

    engine.fire(rules, Facts())

    assert ('before_evaluate', 'r2') not in journal


def test_listener_notifications(journal):
    rules = Rules(
        SampleRule('r1', 1, journal),
        SampleRule('r2', 2, journal, matches=False),
        SampleRule('r3', 3, journal, error=ValueError('boom')),
    )
    engine = RulesEngine()
    engine.register_rule_listener(RecordingListener(journal))
    engine.register_engine_listener(RecordingEngineListener(journal))

    engine.fire(rules, Facts())

    assert journal == [
        ('before_rules', 3),
        ('before_evaluate', 'r1'),
        ('evaluate', 'r1'),
        ('after_evaluate', 'r1', True),
        ('before_execute', 'r1'),
        ('execute', 'r1'),
        ('on_success', 'r1'),
        ('before_evaluate', 'r2'),
        ('evaluate', 'r2'),
        ('after_evaluate', 'r2', False),
        ('before_evaluate', 'r3'),
        ('evaluate', 'r3'),
        ('after_evaluate', 'r3', True),
        ('before_execute', 'r3'),
        ('execute', 'r3'),
        ('on_failure', 'r3', 'boom'),
        ('after_rules', 3),
    ]


def test_vetoed_rule_is_skipped(journal):
    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 2, journal))
    engine = RulesEngine()
    engine.register_rule_listener(RecordingListener(journal), RecordingListener([], veto=('r1',)))

    engine.fire(rules, Facts())

    assert evaluated(journal) == ['r2']
    assert ('after_evaluate', 'r1', True) not in journal
    assert ('after_evaluate', 'r1', False) not in journal


def test_listener_errors_propagate(journal):
    class BrokenListener(RuleListener):
        def on_success(self, rule, facts):
            raise RuntimeError('listener failure')

    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 2, journal))
    engine = RulesEngine()
    engine.register_rule_listener(BrokenListener())

    with pytest.raises(RuntimeError, match='listener failure'):
        engine.fire(rules, Facts())

    assert executed(journal) == ['r1']


def test_unregister_listeners(journal):
    listener = RecordingListener(journal)
    engine_listener = RecordingEngineListener(journal)
    engine = RulesEngine()
    engine.register_rule_listener(listener)
    engine.register_engine_listener(engine_listener)

    engine.unregister_rule_listener(listener)
    engine.unregister_engine_listener(engine_listener)
    engine.fire(Rules(SampleRule('r1', 1, journal)), Facts())

    assert engine.rule_listeners == ()
    assert engine.engine_listeners == ()
    assert journal == [('evaluate', 'r1'), ('execute', 'r1')]


def test_check(journal):
    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 2, journal, matches=False))
    engine = RulesEngine()
    engine.register_engine_listener(RecordingEngineListener(journal))

    result = engine.check(rules, Facts())

    assert len(result) == 2
    assert {r.name: v for r, v in result.items()} == {'r1': True, 'r2': False}
    assert executed(journal) == []
    assert journal[0] == ('before_rules', 2)
    assert journal[-1] == ('after_rules', 2)


def test_check_omits_vetoed_rules(journal):
    rules = Rules(SampleRule('r1', 1, journal), SampleRule('r2', 2, journal))
    engine = RulesEngine()
    engine.register_rule_listener(RecordingListener(journal, veto=('r2',)))

    result = engine.check(rules, Facts())

    assert [r.name for r in result] == ['r1']
    assert not any(entry[0] in ('after_evaluate', 'on_success') for entry in journal)


@rule(name="decrease temperature", priority=1)
class DecreaseTemperature(object):
    @condition
    @fact(temperature='temperature')
    def it_is_hot(self, temperature) -> bool:
        return temperature > 25

    @action
    def cool_down(self, facts):
        facts.put('temperature', facts.get('temperature') - 1)


@rule(name="umbrella", priority=2)
class TakeUmbrella(object):
    @condition
    @fact('rain')
    def it_rains(self, rain) -> bool:
        return rain

    @action
    def take_it(self, facts):
        facts.put('umbrella', True)


def test_fire_tagged_rules_mutates_facts():
    facts = Facts(temperature=30, rain=True)

    RulesEngine().fire(Rules(TakeUmbrella(), DecreaseTemperature()), facts)

    assert facts.get('temperature') == 29
    assert facts.get('umbrella') is True


def test_missing_fact_does_not_stop_firing():
    facts = Facts(rain=True)

    RulesEngine().fire(Rules(DecreaseTemperature(), TakeUmbrella()), facts)

    assert facts.get('umbrella') is True
    assert not facts.contains('temperature')


def test_engine_parameters_are_immutable():
    params = EngineParameters()

    with pytest.raises(Exception):
        params.priority_threshold = 1

    changed = params.set(skip_on_first_applied_rule=True)
    assert changed.skip_on_first_applied_rule is True
    assert params.skip_on_first_applied_rule is False


def test_check_with_missing_fact_is_false():
    facts = Facts(rain=True)

    result = RulesEngine().check(Rules(DecreaseTemperature(), TakeUmbrella()), facts)

    assert {r.name: v for r, v in result.items()} == {
        'decrease temperature': False,
        'umbrella': True,
    }
    assert not facts.contains('umbrella')
