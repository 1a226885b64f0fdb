# -*- coding: utf-8 -*-
"""
Credits gate - pre-flight affordability check for credit-spending actions.

Callers ask `check()` for a decision and proceed themselves, or hand the
action to `check_and_proceed()`. A declined decision has already routed
the user to the upgrade screen; nothing downstream may run.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from app.config import Config
from services.credit_service import CreditFlowManager, CreditService
from services.error_mapper import is_insufficient_credits_error
from services.exceptions import ApiException, InsufficientCreditsError, NetworkException
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Outcome of a pre-flight credits check."""
    allowed: bool
    action: str
    cost: int = 0
    available: Optional[int] = None
    route: Optional[str] = None

    def __bool__(self):
        return self.allowed


class CreditsGate:
    """Pre-flight credits check with upgrade routing on decline."""

    def __init__(self, credit_service: CreditService,
                 flow_manager: Optional[CreditFlowManager] = None,
                 source: str = "subject_onboarding"):
        self.credit_service = credit_service
        self.flow_manager = flow_manager or CreditFlowManager()
        self.source = source

    def check(self, action: str, user_id: Optional[str] = None) -> GateDecision:
        """
        Decide whether `action` may run.

        Free actions are allowed without contacting the backend. Otherwise
        the cached balance is used, fetched first when nothing is cached.

        Raises:
            ApiException / NetworkException: the balance could not be fetched
        """
        cost = self.credit_service.get_cost(action)
        logger.info(f"Checking credits for action: {action} (cost {cost}, source {self.source})")

        if cost == 0:
            return GateDecision(allowed=True, action=action, cost=0)

        if self.credit_service.get_cached_balance() is None and user_id:
            self.credit_service.fetch_balance(user_id)

        balance = self.credit_service.get_cached_balance()
        available = balance.credits if balance else 0

        if self.credit_service.has_enough_credits(action):
            return GateDecision(allowed=True, action=action, cost=cost, available=available)

        logger.info("Insufficient credits, routing to upgrade flow")
        route = self.flow_manager.handle_insufficient_credits(
            tier=balance.tier if balance else Config.DEFAULT_SUBSCRIPTION_TIER,
            current_credits=available,
            required_credits=cost,
            source=self.source,
        )
        return GateDecision(allowed=False, action=action, cost=cost, available=available, route=route)

    def commit(self, action: str):
        """Record the spend locally once the caller proceeds."""
        self.credit_service.deduct_credits_optimistically(action)

    def settle(self, user_id: Optional[str]):
        """Resync the balance after the action; failures leave the local value."""
        if not user_id:
            return
        try:
            self.credit_service.refresh_balance(user_id)
        except (ApiException, NetworkException) as e:
            logger.warning(f"Balance refresh failed: {e}")

    def handle_backend_rejection(self, error: Exception, action: str,
                                 user_id: Optional[str] = None) -> GateDecision:
        """
        Turn a backend insufficient-credits rejection into a declined decision.

        The balance is refreshed from the server before routing.
        """
        logger.info("Backend rejected the action for insufficient credits")
        self.settle(user_id)

        balance = self.credit_service.get_cached_balance()
        cost = self.credit_service.get_cost(action)
        if isinstance(error, InsufficientCreditsError):
            available, required = error.available, error.required or cost
        else:
            data = getattr(error, "response_data", None) or {}
            available = data.get("available", balance.credits if balance else 0)
            required = data.get("required", cost)

        route = self.flow_manager.handle_insufficient_credits(
            tier=balance.tier if balance else Config.DEFAULT_SUBSCRIPTION_TIER,
            current_credits=available,
            required_credits=required,
            source=self.source,
        )
        return GateDecision(allowed=False, action=action, cost=cost, available=available, route=route)

    def check_and_proceed(self, action: str, on_proceed: Callable[[], None],
                          user_id: Optional[str] = None) -> bool:
        """
        Run `on_proceed` when the action is affordable.

        Returns False when declined up front or rejected by the backend
        for insufficient credits; any other exception from `on_proceed`
        propagates.
        """
        if not self.check(action, user_id):
            return False

        self.commit(action)
        try:
            on_proceed()
        except Exception as e:
            if is_insufficient_credits_error(e):
                self.handle_backend_rejection(e, action, user_id)
                return False
            raise

        self.settle(user_id)
        logger.info("Action completed successfully")
        return True
