import logging
from pathlib import Path

from core.environment.config import Settings
from pnl.entities import ReportArtifacts
from pnl.loaders import load_baseline, load_run_config
from pnl.reconciliation import BalanceReconciler, sort_records
from pnl.report import ReportEmitter
from pnl.services import BalanceFanOut


class ComputePnLUseCase:
    """
    Use case for computing the balance delta report of one run.

    Parameters
    ----------
    fan_out : BalanceFanOut
        Orchestrator querying all chains
    reconciler : BalanceReconciler
        Baseline comparison
    emitter : ReportEmitter
        Report writer
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    """

    def __init__(
        self,
        fan_out: BalanceFanOut,
        reconciler: BalanceReconciler,
        emitter: ReportEmitter,
        settings: Settings,
        logger: logging.Logger
    ):
        self.fan_out = fan_out
        self.reconciler = reconciler
        self.emitter = emitter
        self.settings = settings
        self.logger = logger

    async def __call__(
        self,
        config_path: str | Path,
        baseline_path: str | Path,
        out_path: str | Path
    ) -> ReportArtifacts:
        """
        Execute use case.

        Inputs are loaded before any network call, so a bad config or
        baseline aborts the run without querying.

        Parameters
        ----------
        config_path : str | Path
            Run config (chains, wallets, tokens)
        baseline_path : str | Path
            Baseline quantities by composite key
        out_path : str | Path
            CSV report path

        Returns
        -------
        ReportArtifacts
            Files written
        """
        config = load_run_config(config_path)
        baseline = load_baseline(baseline_path)
        self.logger.info(
            f"Loaded {len(config.chains)} chains, {len(config.wallets)} wallets, "
            f"{len(config.tokens)} tokens, {len(baseline)} baseline entries"
        )

        balances = await self.fan_out.run(
            chains=config.chains,
            wallets=config.wallets,
            tokens=config.tokens,
            decimals=config.decimals_by_token()
        )

        records = self.reconciler.reconcile(balances, baseline)
        if self.settings.sort_report:
            records = sort_records(records)

        return self.emitter.emit(records, out_path)
