from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for all custom exceptions.
    """

    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        """
        Return default error message.

        Returns
        -------
        str
            Default error message
        """
        return "error.unknown"

    def get_exit_code(self) -> int:
        """
        Return process exit code for exception.

        Returns
        -------
        int
            Exit code
        """
        return 1


class InputLoadException(BaseCustomException):
    """Run input could not be loaded."""

    def get_default_message(self) -> str:
        return "error.input.load_failed"


class ConfigLoadException(InputLoadException):
    """Config file missing or malformed."""

    def get_default_message(self) -> str:
        return "error.config.load_failed"


class BaselineLoadException(InputLoadException):
    """Baseline file missing or malformed."""

    def get_default_message(self) -> str:
        return "error.baseline.load_failed"


class InvalidAddressException(BaseCustomException):
    """Invalid address exception."""

    def get_default_message(self) -> str:
        return "error.address.invalid"


class ReportWriteException(BaseCustomException):
    """Report could not be persisted."""

    def get_default_message(self) -> str:
        return "error.report.write_failed"
