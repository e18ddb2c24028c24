"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ExpenseNotFoundError(DomainException):
    """No stored expense with the requested id"""

    pass


class GoalNotFoundError(DomainException):
    """No stored savings goal with the requested id"""

    pass


class InvalidAmountError(DomainException, ValueError):
    """Amount text could not be parsed into a currency value"""

    pass


class InvalidQuestionError(DomainException):
    """Question scoring can exceed its best-answer score"""

    pass
