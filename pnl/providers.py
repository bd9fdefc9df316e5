from dishka import Provider, Scope, provide, FromComponent
from pnl.services import BalanceFanOut, ChainQueryClient
from pnl.reconciliation import BalanceReconciler
from pnl.report import ReportEmitter
from pnl.usecases import ComputePnLUseCase
from typing import Annotated
from core.environment.config import Settings
import logging


class PnLProvider(Provider):
    """
    Provider for balance querying and reporting dependencies.
    """

    component = "pnl"

    @provide(scope=Scope.APP)
    def get_chain_query_client(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ChainQueryClient:
        """
        Provide chain query client.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ChainQueryClient
            Client for eth_call requests
        """
        return ChainQueryClient(settings=settings, logger=logger)

    @provide(scope=Scope.APP)
    def get_balance_fan_out(
        self,
        client: Annotated[ChainQueryClient, FromComponent("pnl")],
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> BalanceFanOut:
        """
        Provide fan-out orchestrator.

        Parameters
        ----------
        client : ChainQueryClient
            Chain query client
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        BalanceFanOut
            Orchestrator instance
        """
        return BalanceFanOut(client=client, settings=settings, logger=logger)

    @provide(scope=Scope.APP)
    def get_reconciler(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> BalanceReconciler:
        return BalanceReconciler(logger=logger)

    @provide(scope=Scope.APP)
    def get_report_emitter(
        self,
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ReportEmitter:
        return ReportEmitter(logger=logger)

    @provide(scope=Scope.REQUEST)
    def get_compute_pnl_use_case(
        self,
        fan_out: Annotated[BalanceFanOut, FromComponent("pnl")],
        reconciler: Annotated[BalanceReconciler, FromComponent("pnl")],
        emitter: Annotated[ReportEmitter, FromComponent("pnl")],
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ComputePnLUseCase:
        """
        Provide compute PnL use case.

        Parameters
        ----------
        fan_out : BalanceFanOut
            Fan-out orchestrator
        reconciler : BalanceReconciler
            Baseline reconciler
        emitter : ReportEmitter
            Report emitter
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ComputePnLUseCase
            Use case instance
        """
        return ComputePnLUseCase(
            fan_out=fan_out,
            reconciler=reconciler,
            emitter=emitter,
            settings=settings,
            logger=logger
        )
