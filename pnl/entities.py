from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field


class QueryTarget(BaseModel):
    """
    One (wallet, token) pair queried on every chain.

    Attributes
    ----------
    wallet : str
        Wallet address as given in the run config
    token : str
        Token contract address as given in the run config
    """
    wallet: str
    token: str

    model_config = ConfigDict(frozen=True)


class BalanceRecord(BaseModel):
    """
    Entity representing a token balance read from one chain.

    Attributes
    ----------
    chain : str
        Chain name from the run config
    wallet : str
        Wallet address
    token : str
        Token contract address
    quantity : float
        Balance in token units (raw amount divided by 10**decimals)
    """
    chain: str
    wallet: str
    token: str
    quantity: float

    model_config = ConfigDict(frozen=True, from_attributes=True)


class ReconciledRecord(BaseModel):
    """
    Entity representing a balance compared against its baseline.

    Attributes
    ----------
    chain : str
        Chain name
    wallet : str
        Wallet address
    token : str
        Token contract address
    qty : float
        Current balance
    base_qty : float
        Baseline balance (0.0 when the baseline has no entry)
    diff : float
        qty - base_qty
    has_baseline : bool
        Whether the baseline had an entry for this record; not serialized
    """
    chain: str
    wallet: str
    token: str
    qty: float
    base_qty: float
    diff: float
    has_baseline: bool = Field(default=True, exclude=True)

    model_config = ConfigDict(frozen=True)


class ReportArtifacts(BaseModel):
    """
    Files written by the report emitter.

    Attributes
    ----------
    csv_path : Path
        Tabular report
    json_path : Path
        Structured mirror of the same records
    rows : int
        Number of records written
    """
    csv_path: Path
    json_path: Path
    rows: int
