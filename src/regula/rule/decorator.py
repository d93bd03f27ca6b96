import itertools
from typing import Callable

from .datadef import ActionMeta, RuleMeta, DEFAULT_PRIORITY

_action_seq = itertools.count()


def rule(name=None, description: str = None, priority: int = DEFAULT_PRIORITY) -> Callable:
    ''' Tag a class as a rule definition. Usable bare (`@rule`) or with metadata
        (`@rule(name='weather', priority=1)`). Name defaults to the class name.
    '''
    def decorator(cls):
        cls.__rule__ = RuleMeta(name=name, description=description, priority=priority)
        return cls

    if isinstance(name, type):
        cls, name = name, None
        return decorator(cls)

    return decorator


def condition(func: Callable) -> Callable:
    func.__condition__ = True
    return func


def action(order=0) -> Callable:
    ''' Tag an action method. Actions run in ascending `order`. '''
    def decorator(func):
        func.__action__ = ActionMeta(order=order, seq=next(_action_seq))
        return func

    if callable(order):
        func, order = order, 0
        return decorator(func)

    return decorator


def priority(func: Callable) -> Callable:
    func.__priority__ = True
    return func


def fact(*names: str, **mapping: str) -> Callable:
    ''' Bind method parameters to fact names.

        @fact('rain')                   # parameter `rain` <= fact 'rain'
        @fact(temp='temperature')       # parameter `temp` <= fact 'temperature'

        Parameters left untagged receive the whole Facts object.
    '''
    def decorator(func):
        bindings = dict(getattr(func, '__facts__', None) or {})
        bindings.update({n: n for n in names})
        bindings.update(mapping)
        func.__facts__ = bindings
        return func

    return decorator
