#!/usr/bin/env python
"""
Weather: a tagged rule class and rules loaded from a YAML file.
"""

from pathlib import Path

from regula.rule import Facts, Rules, RulesEngine, action, condition, fact, rule
from regula.reader import ExprRuleFactory


@rule(name="weather rule", description="if it rains then take an umbrella")
class WeatherRule(object):

    @condition
    @fact('rain')
    def it_rains(self, rain) -> bool:
        return rain

    @action
    def take_an_umbrella(self):
        print("It rains, take an umbrella!")


def main():
    facts = Facts(rain=True, temperature=28, humidity=80)

    rules = Rules(WeatherRule())
    RulesEngine().fire(rules, facts)

    expr_rules = ExprRuleFactory().create_rules(Path(__file__).parent / "rules" / "weather.yml")
    RulesEngine().fire(expr_rules, facts)
    print(f"Advice: {facts.get('advice')}")


if __name__ == "__main__":
    main()
