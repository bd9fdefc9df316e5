import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.

    Attributes
    ----------
    log_level : str
        Root log level for the run
    rpc_timeout : float | None
        Total timeout per RPC call in seconds (None keeps aiohttp default)
    rpc_request_id : int
        JSON-RPC id sent with every eth_call
    default_decimals : int
        Decimals used for tokens without an override in the run config
    sort_report : bool
        Sort reconciled records by (chain, wallet, token) before writing
    """

    log_level: str = "INFO"

    rpc_timeout: float | None = Field(default=None, gt=0)
    rpc_request_id: int = 1

    default_decimals: int = Field(default=18, ge=0)
    sort_report: bool = True

    model_config = SettingsConfigDict(
        env_prefix="PNL_",
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
