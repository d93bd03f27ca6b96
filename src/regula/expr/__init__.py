""" Conditions and actions written as Python expressions over the facts """

from ._meta import config, logger
from .expression import ExprCondition, ExprAction
from .rule import ExprRule

__all__ = (
    'config',
    'logger',
    'ExprAction',
    'ExprCondition',
    'ExprRule',
)
