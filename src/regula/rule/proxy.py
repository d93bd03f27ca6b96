''' Adapter turning an object tagged with `@rule`, `@condition`, `@action`
    and `@priority` into the `Rule` capability.

    The tagged members are located and validated once, when the proxy
    is created. Evaluation and execution only resolve parameters from
    the facts and call the bound methods.
'''
import inspect
from typing import Any, Callable, List, NamedTuple, Optional, Tuple

from regula.error import NoSuchFactError, RuleDefinitionError, RuleEvaluationError

from .base import Rule, is_rule, default_compare
from .datadef import RuleMeta
from .facts import Facts
from . import logger, config

LOG_MISSING_FACTS = config.LOG_MISSING_FACTS

# Parameter binding. A `None` fact name means "pass the Facts object"
Binding = Tuple[Optional[str], ...]


class TaggedMethod(NamedTuple):
    name: str
    func: Callable
    binding: Binding


def _annotation_name(annotation) -> Optional[str]:
    if annotation is inspect.Parameter.empty:
        return None

    if isinstance(annotation, str):
        return annotation.rpartition('.')[-1]

    return getattr(annotation, '__name__', str(annotation))


class RuleDefinitionValidator(object):
    ''' Checks the shape of a tagged rule class and computes the
        parameter bindings of its condition and actions. '''

    def __init__(self, target: Any):
        self._target = target
        self._cls = type(target)
        self._rule_name = self._cls.__name__

    def error(self, code, message):
        return RuleDefinitionError(f"R00.1{code:02d}", f"Rule [{self._rule_name}]: {message}")

    def tagged(self, marker: str) -> List[Tuple[str, Callable]]:
        members = []
        for attr in dir(self._cls):
            if attr.startswith('__'):
                continue

            func = getattr(self._cls, attr, None)
            if callable(func) and getattr(func, marker, None):
                members.append((attr, func))

        return members

    def bind(self, attr: str, func: Callable) -> Binding:
        method = getattr(self._target, attr)
        signature = inspect.signature(method)
        facts = getattr(func, '__facts__', None) or {}

        unknown = set(facts) - set(signature.parameters)
        if unknown:
            raise self.error(5, f"method [{attr}] tags unknown parameters {sorted(unknown)}")

        binding = []
        for pname, param in signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                raise self.error(6, f"method [{attr}] must not declare variadic parameters")

            if pname in facts:
                binding.append(facts[pname])
                continue

            annotation = _annotation_name(param.annotation)
            if annotation not in (None, Facts.__name__):
                raise self.error(
                    7, f"untagged parameter [{pname}] of method [{attr}] must be of type Facts")
            binding.append(None)

        if binding.count(None) > 1:
            raise self.error(8, f"method [{attr}] can have at most one untagged (Facts) parameter")

        return tuple(binding)

    def validate(self) -> Tuple[TaggedMethod, Tuple[TaggedMethod, ...], Optional[str]]:
        if not isinstance(getattr(self._cls, '__rule__', None), RuleMeta):
            raise self.error(0, "class must be decorated with @rule")

        conditions = self.tagged('__condition__')
        if len(conditions) != 1:
            raise self.error(1, f"exactly one @condition method is required, found {len(conditions)}")

        cond_attr, cond_func = conditions[0]
        returns = _annotation_name(inspect.signature(cond_func).return_annotation)
        if returns not in (None, 'bool'):
            raise self.error(2, f"condition method [{cond_attr}] must return bool")

        condition = TaggedMethod(cond_attr, getattr(self._target, cond_attr), self.bind(cond_attr, cond_func))

        actions = self.tagged('__action__')
        if not actions:
            raise self.error(3, "at least one @action method is required")

        orders = [func.__action__.order for _, func in actions]
        if len(set(orders)) != len(orders):
            raise self.error(4, f"action orders must be distinct, got {sorted(orders)}")

        actions.sort(key=lambda a: (a[1].__action__.order, a[1].__action__.seq))
        actions = tuple(
            TaggedMethod(attr, getattr(self._target, attr), self.bind(attr, func))
            for attr, func in actions
        )

        priorities = self.tagged('__priority__')
        if len(priorities) > 1:
            raise self.error(9, "at most one @priority method is allowed")

        priority_attr = None
        if priorities:
            priority_attr, priority_func = priorities[0]
            if inspect.signature(getattr(self._target, priority_attr)).parameters:
                raise self.error(10, f"priority method [{priority_attr}] must not take parameters")

            returns = _annotation_name(inspect.signature(priority_func).return_annotation)
            if returns not in (None, 'int'):
                raise self.error(11, f"priority method [{priority_attr}] must return int")

        return condition, actions, priority_attr


class RuleProxy(Rule):
    def __init__(self, target: Any):
        self._target = target
        self._condition, self._actions, self._priority_attr = \
            RuleDefinitionValidator(target).validate()
        self._meta: RuleMeta = type(target).__rule__

    @property
    def target(self):
        return self._target

    @property
    def name(self) -> str:
        return self._meta.name or type(self._target).__name__

    @property
    def description(self) -> str:
        if self._meta.description:
            return self._meta.description

        return "when %s then %s" % (self._condition.name, ",".join(a.name for a in self._actions))

    @property
    def priority(self) -> int:
        if self._priority_attr is not None:
            return getattr(self._target, self._priority_attr)()

        return self._meta.priority

    def resolve(self, binding: Binding, facts: Facts) -> list:
        args = []
        for fact_name in binding:
            if fact_name is None:
                args.append(facts)
                continue

            if not facts.contains(fact_name):
                raise NoSuchFactError(
                    "R00.201",
                    f"No fact named [{fact_name}] found in known facts: {facts}",
                    fact_name
                )
            args.append(facts.get(fact_name))

        return args

    def evaluate(self, facts: Facts) -> bool:
        try:
            args = self.resolve(self._condition.binding, facts)
        except NoSuchFactError as e:
            LOG_MISSING_FACTS and logger.error(
                "Rule [%s] has been evaluated to false due to a declared but missing fact [%s] in %s",
                self.name, e.missing_fact, facts)
            return False

        try:
            return bool(self._condition.func(*args))
        except TypeError as e:
            raise RuleEvaluationError(
                "R00.301",
                f"Types of injected facts in method [{self._condition.name}] "
                f"in rule [{self.name}] do not match parameters types",
                str(e)
            ) from e

    def execute(self, facts: Facts) -> None:
        for action in self._actions:
            action.func(*self.resolve(action.binding, facts))

    def compare_to(self, other) -> int:
        compare_to = getattr(self._target, 'compare_to', None)
        if callable(compare_to):
            return compare_to(other)

        return default_compare(self, other)

    def __str__(self):
        if type(self._target).__str__ is not object.__str__:
            return str(self._target)

        return self.name


def as_rule(obj: Any) -> Rule:
    ''' Return the object itself when it already is a rule,
        otherwise a validated proxy around it. '''
    if obj is None:
        raise RuleDefinitionError("R00.120", "Cannot register an empty (None) rule")

    if is_rule(obj):
        return obj

    return RuleProxy(obj)
