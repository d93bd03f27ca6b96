from typing import Any, Dict, Iterator, NamedTuple

from pyrsistent import pmap, PMap

from regula.error import FactError


class Fact(NamedTuple):
    name: str
    value: Any


class Facts(object):
    ''' A mutable bag of named facts.

        Names are case-sensitive, a name is bound to at most one value
        (last write wins) and iteration follows insertion order.
    '''

    def __init__(self, data: Dict[str, Any] = None, **kwargs):
        self._facts: Dict[str, Any] = {}
        for name, value in {**(data or {}), **kwargs}.items():
            self.put(name, value)

    def put(self, name: str, value: Any) -> None:
        if not isinstance(name, str) or not name.strip():
            raise FactError("R00.401", f"Fact name must be a non-blank string: {name!r}")

        self._facts[name] = value

    def get(self, name: str, default: Any = None) -> Any:
        return self._facts.get(name, default)

    def remove(self, name: str) -> None:
        self._facts.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self._facts

    def clear(self) -> None:
        self._facts.clear()

    def as_map(self) -> PMap:
        ''' Read-only snapshot of the facts '''
        return pmap(self._facts)

    def __contains__(self, name) -> bool:
        return self.contains(name)

    def __getitem__(self, name):
        return self._facts[name]

    def __setitem__(self, name, value):
        self.put(name, value)

    def __iter__(self) -> Iterator[Fact]:
        return (Fact(k, v) for k, v in self._facts.items())

    def __len__(self) -> int:
        return len(self._facts)

    def __repr__(self):
        return "Facts(%s)" % ", ".join(f"{k}={v!r}" for k, v in self._facts.items())
