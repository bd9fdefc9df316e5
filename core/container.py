from dishka import AsyncContainer, make_async_container

from core.environment.config import Settings
from core.environment.providers import EnvironmentProvider
from core.logging.providers import LoggerProvider
from pnl.providers import PnLProvider


def build_container(settings: Settings | None = None) -> AsyncContainer:
    """
    Assemble the dependency container for one run.

    Parameters
    ----------
    settings : Settings | None
        Settings override, read from the environment when omitted

    Returns
    -------
    AsyncContainer
        APP-scoped container
    """
    return make_async_container(
        EnvironmentProvider(settings),
        LoggerProvider(),
        PnLProvider()
    )
