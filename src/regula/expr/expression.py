import builtins

from regula.error import ExpressionError
from regula.rule import Facts

from . import logger, config

SAFE_BUILTINS = {name: getattr(builtins, name) for name in config.EXPR_SAFE_BUILTINS}
_MISSING = object()


def compile_expression(expression: str, mode: str):
    if not isinstance(expression, str) or not expression.strip():
        raise ExpressionError("R00.501", f"Expression must be a non-blank string: {expression!r}")

    try:
        return compile(expression.strip(), f'<{mode}: {expression.strip()}>', mode)
    except SyntaxError as e:
        raise ExpressionError("R00.502", f"Unable to compile expression: {expression!r}", str(e)) from e


def expression_namespace(facts: Facts) -> dict:
    ''' Facts are plain names of the namespace, the Facts object itself is `facts` '''
    return {**facts.as_map(), "__builtins__": SAFE_BUILTINS, "facts": facts}


class ExprCondition(object):
    ''' A condition written as a Python expression. Facts are plain names:

            ExprCondition("temperature > 25 and not rain")

        A reference to an unknown fact makes the condition false.
    '''

    def __init__(self, expression: str):
        self._expression = expression
        self._code = compile_expression(expression, 'eval')

    @property
    def expression(self) -> str:
        return self._expression

    def __call__(self, facts: Facts) -> bool:
        try:
            return bool(eval(self._code, expression_namespace(facts)))
        except NameError as e:
            logger.error("Condition [%s] has been evaluated to false: %s", self._expression, e)
            return False
        except Exception:
            logger.exception("Unable to evaluate expression [%s] on facts: %s", self._expression, facts)
            raise

    def __repr__(self):
        return f"ExprCondition({self._expression!r})"


class ExprAction(object):
    ''' An action written as Python statements. Names bound or rebound by the
        statements are written back into the facts, names deleted with `del`
        are removed from them. Changes made through the `facts` handle are kept:

            ExprAction("temperature = temperature - 1")
            ExprAction("facts.remove('rain')")
    '''

    def __init__(self, expression: str):
        self._expression = expression
        self._code = compile_expression(expression, 'exec')

    @property
    def expression(self) -> str:
        return self._expression

    def __call__(self, facts: Facts) -> None:
        namespace = expression_namespace(facts)
        seeded = dict(namespace)
        try:
            exec(self._code, namespace)
        except Exception:
            logger.exception("Unable to evaluate expression [%s] on facts: %s", self._expression, facts)
            raise

        for name in seeded.keys() - namespace.keys():
            if not name.startswith('_'):
                facts.remove(name)

        for name, value in namespace.items():
            if name.startswith('_') or value is facts:
                continue

            # Only names the statements (re)bound, the rest may be stale
            if seeded.get(name, _MISSING) is not value:
                facts.put(name, value)

    def __repr__(self):
        return f"ExprAction({self._expression!r})"
