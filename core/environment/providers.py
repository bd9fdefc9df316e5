from dishka import Provider, Scope, provide
from core.environment.config import Settings


class EnvironmentProvider(Provider):
    """
    Provider for environment configuration.

    Parameters
    ----------
    settings : Settings | None
        Pre-built settings to serve instead of reading the environment
    """

    component = "environment"
    scope = Scope.APP

    def __init__(self, settings: Settings | None = None):
        super().__init__()
        self._settings = settings

    @provide
    def get_environment(self) -> Settings:
        """
        Provide run settings.

        Returns
        -------
        Settings
            Explicit settings if given, otherwise loaded from env / env file
        """
        if self._settings is not None:
            return self._settings
        return Settings()
