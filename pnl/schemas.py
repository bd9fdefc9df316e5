from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    TypeAdapter,
    field_validator,
    model_validator,
)

from core.exceptions import InvalidAddressException
from pnl.codec import normalize_address


def _validate_address(value: str) -> str:
    try:
        normalize_address(value)
    except InvalidAddressException as e:
        raise ValueError(e.message)
    if not value.startswith('0x'):
        raise ValueError(f"Address must be 0x-prefixed: {value!r}")
    return value


class ChainConfig(BaseModel):
    """
    One chain from the run config.

    Attributes
    ----------
    name : str
        Chain identifier, unique within a run
    rpc : str
        JSON-RPC endpoint URL
    multicall : str
        Multicall contract address (carried, not used for queries)
    """
    name: str = Field(..., min_length=1)
    rpc: str = Field(..., min_length=1)
    multicall: str

    @field_validator('multicall')
    @classmethod
    def validate_multicall(cls, v: str) -> str:
        return _validate_address(v)

    model_config = ConfigDict(frozen=True)


class RunConfig(BaseModel):
    """
    Config file schema.

    Attributes
    ----------
    chains : list[ChainConfig]
        Chains to query
    wallets : list[str]
        Wallet addresses
    tokens : list[str]
        ERC-20 token contract addresses
    decimals : dict[str, int]
        Optional per-token decimals override, keyed by token address
    """
    chains: list[ChainConfig]
    wallets: list[str]
    tokens: list[str]
    decimals: dict[str, int] = Field(default_factory=dict)

    @field_validator('wallets', 'tokens')
    @classmethod
    def validate_addresses(cls, v: list[str]) -> list[str]:
        return [_validate_address(address) for address in v]

    @field_validator('decimals')
    @classmethod
    def validate_decimals(cls, v: dict[str, int]) -> dict[str, int]:
        for token, decimals in v.items():
            _validate_address(token)
            if decimals < 0:
                raise ValueError(f"Negative decimals for {token}")
        return v

    @model_validator(mode='after')
    def validate_unique_chains(self) -> 'RunConfig':
        names = [chain.name for chain in self.chains]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate chain names: {', '.join(duplicates)}")
        return self

    def decimals_by_token(self) -> dict[str, int]:
        """
        Decimals override keyed by lowercased token address.

        Returns
        -------
        dict[str, int]
            Lookup table for the fan-out orchestrator
        """
        return {token.lower(): decimals for token, decimals in self.decimals.items()}


# numeric strings and booleans are rejected, JSON integers accepted
BaselineAdapter = TypeAdapter(dict[str, StrictFloat])
