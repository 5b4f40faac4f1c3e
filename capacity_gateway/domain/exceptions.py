"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class BankNotFoundError(DomainException):
    """Referenced bank does not exist"""

    pass


class ProjectNotFoundError(DomainException):
    """Referenced project does not exist"""

    pass


class AllocationRequiredError(DomainException):
    """Project cannot be issued before a bank is allocated"""

    pass


class ProjectNotPlannedError(DomainException):
    """Operation only applies to projects still in Planned status"""

    pass
