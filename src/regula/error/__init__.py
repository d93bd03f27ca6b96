from regula import config, logger


DEBUG_APP_EXCEPTION = config.DEBUG_APP_EXCEPTION


class RegulaException(Exception):
    label = "Rule Engine Error"
    errcode = "R00.000"

    def __init__(self, errcode, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.errcode = errcode

        DEBUG_APP_EXCEPTION and logger.exception(message)

    def __str__(self):
        if self.details is None:
            return f"{self.errcode} >> {self.message}"

        return f"{self.errcode} >> {self.message} >> {self.details}"

    @property
    def content(self):
        if not self.details:
            return {"errcode": self.errcode, "message": self.message}

        return {"errcode": self.errcode, "message": self.message, "details": self.details}


class RuleDefinitionError(RegulaException):
    ''' The shape of a rule object violates the rule contract.
        Raised at registration time, never while firing. '''
    label = "Invalid Rule Definition"
    errcode = "R00.100"


class NoSuchFactError(RegulaException):
    label = "Missing Fact"
    errcode = "R00.200"

    def __init__(self, errcode, message, missing_fact, details=None):
        super().__init__(errcode, message, details)
        self.missing_fact = missing_fact


class RuleEvaluationError(RegulaException):
    label = "Rule Evaluation Failed"
    errcode = "R00.300"


class FactError(RegulaException):
    label = "Invalid Fact"
    errcode = "R00.400"


class ExpressionError(RegulaException):
    label = "Invalid Expression"
    errcode = "R00.500"
