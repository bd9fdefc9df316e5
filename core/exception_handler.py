import logging

from core.exceptions import BaseCustomException


def handle_exception(exc: Exception, logger: logging.Logger) -> int:
    """
    Handler for exceptions that abort a run.

    Parameters
    ----------
    exc : Exception
        Exception that reached the top of the run
    logger : logging.Logger
        Logger instance

    Returns
    -------
    int
        Process exit code
    """
    if isinstance(exc, BaseCustomException):
        logger.error(f"Run aborted: {exc.message}")
        return exc.get_exit_code()

    logger.exception(f"Run aborted: internal error: {exc}")
    return 1
