from pathlib import Path
from pydantic import ValidationError

from core.exceptions import BaselineLoadException, ConfigLoadException
from pnl.schemas import BaselineAdapter, RunConfig


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return None


def load_run_config(path: str | Path) -> RunConfig:
    """
    Load and validate the run config file.

    Parameters
    ----------
    path : str | Path
        Path to the JSON config

    Returns
    -------
    RunConfig
        Chains, wallets, tokens and decimals overrides

    Raises
    ------
    ConfigLoadException
        If the file cannot be read or does not match the schema
    """
    path = Path(path)
    raw = _read_text(path)
    if raw is None:
        raise ConfigLoadException(f"Cannot read config file {path}")
    try:
        return RunConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigLoadException(f"Malformed config file {path}: {e}") from e


def load_baseline(path: str | Path) -> dict[str, float]:
    """
    Load the baseline mapping ``"<chain>:<wallet>:<token>" -> quantity``.

    Parameters
    ----------
    path : str | Path
        Path to the JSON baseline

    Returns
    -------
    dict[str, float]
        Baseline quantities by composite key

    Raises
    ------
    BaselineLoadException
        If the file cannot be read or is not a flat string-to-number object
    """
    path = Path(path)
    raw = _read_text(path)
    if raw is None:
        raise BaselineLoadException(f"Cannot read baseline file {path}")
    try:
        return BaselineAdapter.validate_json(raw)
    except ValidationError as e:
        raise BaselineLoadException(f"Malformed baseline file {path}: {e}") from e
