from bisect import bisect_left
from functools import cmp_to_key
from typing import Any, Callable, Iterator, List, Optional

from .base import Rule, compare_rules
from .proxy import as_rule

Comparator = Callable[[Any, Any], int]


class Rules(object):
    ''' A namespace of rules kept in ascending order.

        The comparator is both the sort key and the uniqueness key:
        a rule comparing equal to a registered one is not added again.
    '''

    def __init__(self, *rules: Any, comparator: Comparator = compare_rules):
        self._comparator = comparator
        self._sort_key = cmp_to_key(comparator)
        self._rules: List[Rule] = []
        self.register(*rules)

    def _locate(self, rule: Rule) -> Optional[int]:
        index = bisect_left(self._rules, self._sort_key(rule), key=self._sort_key)
        if index < len(self._rules) and self._comparator(self._rules[index], rule) == 0:
            return index

        return None

    def register(self, *rules: Any) -> None:
        for item in rules:
            rule = as_rule(item)
            if self._locate(rule) is not None:
                continue

            index = bisect_left(self._rules, self._sort_key(rule), key=self._sort_key)
            self._rules.insert(index, rule)

    def unregister(self, *rules: Any) -> None:
        ''' Remove rules. A string argument removes the first rule whose
            name matches it case-insensitively. '''
        for item in rules:
            rule = self.get(item) if isinstance(item, str) else as_rule(item)
            if rule is None:
                continue

            index = self._locate(rule)
            if index is not None:
                del self._rules[index]

    def get(self, name: str) -> Optional[Rule]:
        ''' First rule (in firing order) with the given name, compared case-insensitively '''
        if name is None:
            raise ValueError("Rule name is required")

        name = name.casefold()
        return next((r for r in self._rules if r.name.casefold() == name), None)

    def is_empty(self) -> bool:
        return not self._rules

    def clear(self) -> None:
        self._rules.clear()

    def size(self) -> int:
        return len(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def __contains__(self, item) -> bool:
        if isinstance(item, str):
            return self.get(item) is not None

        return self._locate(as_rule(item)) is not None

    def __repr__(self):
        return "Rules(%s)" % ", ".join(repr(r) for r in self._rules)
