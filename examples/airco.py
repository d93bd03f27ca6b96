#!/usr/bin/env python
"""
Air conditioning: cool the air while it is hot.

The rule is declared with the builder; the engine is fired until
the rule no longer applies.
"""

from regula.rule import Facts, RuleBuilder, Rules, RulesEngine, RuleListener


def it_is_hot(facts):
    return facts.get("temperature") > 25


def decrease_temperature(facts):
    print("It is hot! cooling air..")
    facts.put("temperature", facts.get("temperature") - 1)


class AppliedRuleCounter(RuleListener):
    def __init__(self):
        self.applied = 0

    def on_success(self, rule, facts):
        self.applied += 1


def main():
    facts = Facts(temperature=30)
    air_conditioning = RuleBuilder() \
        .name("air conditioning rule") \
        .when(it_is_hot) \
        .then(decrease_temperature) \
        .build()

    rules = Rules(air_conditioning)
    engine = RulesEngine()
    counter = AppliedRuleCounter()
    engine.register_rule_listener(counter)

    while True:
        applied = counter.applied
        engine.fire(rules, facts)
        if counter.applied == applied:
            break

    print(f"Temperature is now {facts.get('temperature')}")


if __name__ == "__main__":
    main()
