"""
Multi-chain ERC-20 balance PnL report.

Usage:
    erc20-pnl --config config.json --baseline baseline.json --out pnl.csv

Config (config.json):
    {"chains": [{"name": "eth", "rpc": "https://mainnet.infura.io/v3/KEY",
                 "multicall": "0x5BA1e12693Dc8F9c48aAD8770482f4739bEeD696"}],
     "wallets": ["0x...", "0x..."], "tokens": ["0x...", "0x..."]}
"""
import argparse
import asyncio
import logging
import sys

from core.environment.config import Settings
from core.container import build_container
from core.exception_handler import handle_exception
from pnl.usecases import ComputePnLUseCase


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Compare multi-chain ERC-20 balances against a baseline."
    )
    parser.add_argument('--config', required=True, help='Path to the run config JSON')
    parser.add_argument('--baseline', required=True, help='Path to the baseline JSON')
    parser.add_argument('--out', default='pnl.csv', help='CSV report path (default: pnl.csv)')
    return parser.parse_args(argv)


async def run_cli(args: argparse.Namespace, settings: Settings | None = None) -> int:
    """
    Run one report and map failures to an exit code.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line
    settings : Settings | None
        Settings override, read from the environment when omitted

    Returns
    -------
    int
        0 on success, non-zero on a fatal error
    """
    container = build_container(settings)
    # replaced by the configured logger once settings resolve
    logger = logging.getLogger("erc20_pnl")
    try:
        logger = await container.get(logging.Logger, component="logger")
        async with container() as request_container:
            use_case = await request_container.get(ComputePnLUseCase, component="pnl")
            artifacts = await use_case(
                config_path=args.config,
                baseline_path=args.baseline,
                out_path=args.out
            )
    except Exception as e:
        return handle_exception(e, logger)
    finally:
        await container.close()

    print(f"Wrote {artifacts.csv_path}, {artifacts.json_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(run_cli(parse_arguments(argv)))


if __name__ == "__main__":
    sys.exit(main())
