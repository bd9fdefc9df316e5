"""
Balance reconciliation against a stored baseline.

Each live balance is matched to its baseline entry by composite key
``"<chain>:<wallet>:<token>"`` (exact, case-sensitive). A missing entry
counts as a baseline of 0.0 and is flagged on the record.
"""
import logging
from collections.abc import Iterable, Mapping

from pnl.entities import BalanceRecord, ReconciledRecord


def composite_key(chain: str, wallet: str, token: str) -> str:
    return f"{chain}:{wallet}:{token}"


def sort_records(records: Iterable[ReconciledRecord]) -> list[ReconciledRecord]:
    """Order records by (chain, wallet, token) for reproducible reports."""
    return sorted(records, key=lambda r: (r.chain, r.wallet, r.token))


class BalanceReconciler:
    """
    Attaches baseline comparison to balance records.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def reconcile(
        self,
        records: Iterable[BalanceRecord],
        baseline: Mapping[str, float]
    ) -> list[ReconciledRecord]:
        """
        Compare every balance with its baseline.

        Parameters
        ----------
        records : Iterable[BalanceRecord]
            Balances read from the chains
        baseline : Mapping[str, float]
            Baseline quantities by composite key

        Returns
        -------
        list[ReconciledRecord]
            One record per input record, in input order
        """
        reconciled = []
        missing = 0

        for record in records:
            key = composite_key(record.chain, record.wallet, record.token)
            has_baseline = key in baseline
            base_qty = float(baseline[key]) if has_baseline else 0.0
            if not has_baseline:
                missing += 1

            reconciled.append(
                ReconciledRecord(
                    chain=record.chain,
                    wallet=record.wallet,
                    token=record.token,
                    qty=record.quantity,
                    base_qty=base_qty,
                    diff=record.quantity - base_qty,
                    has_baseline=has_baseline
                )
            )

        if missing:
            self.logger.info(f"{missing} of {len(reconciled)} balances have no baseline entry")
        return reconciled
