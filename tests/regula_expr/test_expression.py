import logging

import pytest

from regula.error import ExpressionError
from regula.expr import ExprAction, ExprCondition, ExprRule
from regula.rule import Facts, Rules, RulesEngine


def test_condition():
    cond = ExprCondition("temperature > 25 and not rain")

    assert cond(Facts(temperature=30, rain=False)) is True
    assert cond(Facts(temperature=20, rain=False)) is False
    assert cond.expression == "temperature > 25 and not rain"


def test_condition_with_builtins():
    assert ExprCondition("len(items) == 2 and max(items) == 3")(Facts(items=[1, 3]))
    assert ExprCondition("any(i > limit for i in items)")(Facts(items=[1, 3], limit=2))


def test_condition_unknown_fact_is_false(caplog):
    with caplog.at_level(logging.ERROR, logger='regula.expr'):
        assert ExprCondition("rain")(Facts()) is False

    assert "evaluated to false" in caplog.text


def test_condition_has_no_access_to_unsafe_builtins():
    assert ExprCondition("open('/etc/passwd')")(Facts()) is False


def test_condition_error_propagates():
    with pytest.raises(ZeroDivisionError):
        ExprCondition("1 / count > 0")(Facts(count=0))


def test_invalid_expression():
    with pytest.raises(ExpressionError):
        ExprCondition("temperature >")

    with pytest.raises(ExpressionError):
        ExprAction("")


def test_action_writes_back_facts():
    facts = Facts(temperature=30, person={'name': 'Tom'})

    ExprAction("temperature = temperature - 1")(facts)
    ExprAction("person['adult'] = True; cooled = True")(facts)

    assert facts.get('temperature') == 29
    assert facts.get('person') == {'name': 'Tom', 'adult': True}
    assert facts.get('cooled') is True


def test_action_can_use_facts_object():
    facts = Facts(rain=True)

    ExprAction("facts.put('umbrella', rain)")(facts)

    assert facts.get('umbrella') is True
    assert len(facts) == 2


def test_action_error_is_raised():
    with pytest.raises(NameError):
        ExprAction("x = unknown + 1")(Facts())


def test_expr_rule_fires():
    facts = Facts(temperature=30)
    hot = ExprRule("hot", "cool the air", 1) \
        .when("temperature > 25") \
        .then("temperature = temperature - 1") \
        .then("cooled = True")

    RulesEngine().fire(Rules(hot), facts)

    assert facts.get('temperature') == 29
    assert facts.get('cooled') is True
    assert [a.expression for a in hot.actions] == ["temperature = temperature - 1", "cooled = True"]


def test_expr_rule_without_condition_never_matches():
    assert ExprRule("empty").then("x = 1").evaluate(Facts()) is False


def test_action_put_through_facts_is_kept():
    facts = Facts(x=1)

    ExprAction("facts.put('x', x + 1)")(facts)

    assert facts.get('x') == 2


def test_action_remove_through_facts_is_kept():
    facts = Facts(rain=True, temperature=20)

    ExprAction("facts.remove('rain')")(facts)

    assert not facts.contains('rain')
    assert facts.get('temperature') == 20


def test_action_del_removes_fact():
    facts = Facts(rain=True, temperature=20)

    ExprAction("del rain")(facts)

    assert not facts.contains('rain')
    assert facts.contains('temperature')


def test_action_rebinding_wins_over_facts_put():
    facts = Facts(x=1)

    ExprAction("facts.put('x', 5); x = 10")(facts)

    assert facts.get('x') == 10
