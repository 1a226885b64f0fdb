# -*- coding: utf-8 -*-
"""
Credit Service
==============

Credit balance for the signed-in account, cached from the subscription
endpoint, plus the routing decision taken when an action is
unaffordable.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional

from app.config import Config, Screens
from services.api_client import StelliumApiClient, get_api_client
from services.exceptions import ApiException
from utils.logger import get_logger

logger = get_logger(__name__)


# Actions that spend credits, and what they cost
CREATE_SELF_PROFILE = "createSelfProfile"
CREATE_GUEST_PROFILE = "createGuestProfile"

CREDIT_COSTS: Dict[str, int] = {
    CREATE_SELF_PROFILE: 0,
    CREATE_GUEST_PROFILE: Config.GUEST_PROFILE_CREDIT_COST,
}

TIER_FREE = "free"
TIER_PREMIUM = "premium"
TIER_PRO = "pro"


@dataclass
class CreditBalance:
    credits: int = 0
    monthly_credits: int = 10
    tier: str = TIER_FREE
    last_updated: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_subscription(cls, subscription: Dict) -> "CreditBalance":
        return cls(
            credits=subscription.get("credits") or 0,
            monthly_credits=subscription.get("monthlyCredits") or 10,
            tier=subscription.get("tier") or Config.DEFAULT_SUBSCRIPTION_TIER,
        )


class CreditService:
    """Fetches, caches and locally adjusts the credit balance."""

    def __init__(self, api_client: Optional[StelliumApiClient] = None):
        self.api = api_client or get_api_client()
        self._balance: Optional[CreditBalance] = None
        self._listeners: List[Callable[[CreditBalance], None]] = []

    # ==================== Balance ====================

    def fetch_balance(self, user_id: str) -> CreditBalance:
        """
        Fetch the balance from the subscription endpoint and cache it.

        Raises:
            ApiException: when the response has no subscription block
            NetworkException: on connection failures
        """
        logger.info(f"Fetching credit balance for user: {user_id}")
        response = self.api.get_subscription_status(user_id)

        subscription = (response or {}).get("subscription")
        if not subscription:
            raise ApiException("No subscription data in response")

        self._balance = CreditBalance.from_subscription(subscription)
        logger.info(f"Balance fetched: {self._balance.credits} credits ({self._balance.tier})")
        self._notify_listeners()
        return self._balance

    def get_cached_balance(self) -> Optional[CreditBalance]:
        return self._balance

    def refresh_balance(self, user_id: str) -> CreditBalance:
        return self.fetch_balance(user_id)

    # ==================== Costs ====================

    def get_cost(self, action: str) -> int:
        if action not in CREDIT_COSTS:
            raise KeyError(f"Unknown credit action: {action}")
        return CREDIT_COSTS[action]

    def has_enough_credits(self, action: str) -> bool:
        """Without a cached balance only free actions are affordable."""
        cost = self.get_cost(action)
        if self._balance is None:
            logger.warning("No balance cached, assuming insufficient credits")
            return cost == 0

        has_enough = self._balance.credits >= cost
        logger.debug(
            f"Credit check: action={action} cost={cost} "
            f"balance={self._balance.credits} has_enough={has_enough}"
        )
        return has_enough

    # ==================== Local updates ====================

    def update_local_balance(self, credits: int):
        if self._balance is not None:
            self._balance.credits = credits
            self._balance.last_updated = datetime.now()
            self._notify_listeners()

    def deduct_credits_optimistically(self, action: str):
        """Deduct locally before the backend confirms; never below zero."""
        if self._balance is None:
            logger.warning("Cannot deduct credits, no balance cached")
            return

        cost = self.get_cost(action)
        new_balance = max(0, self._balance.credits - cost)
        logger.debug(f"Optimistic deduction: {action} {self._balance.credits} -> {new_balance}")
        self.update_local_balance(new_balance)

    # ==================== Listeners ====================

    def add_listener(self, listener: Callable[[CreditBalance], None]):
        self._listeners.append(listener)

    def _notify_listeners(self):
        for listener in list(self._listeners):
            listener(self._balance)


class CreditFlowManager:
    """
    Decides where to send a user who cannot afford an action.

    The decision is reported through `on_route(route_name, params)`; the
    shell owning the screens performs the actual navigation.
    """

    MEDIUM_SHORTFALL_THRESHOLD = 100

    def __init__(self, on_route: Optional[Callable[[str, Dict], None]] = None):
        self.on_route = on_route

    def handle_insufficient_credits(self, tier: str, current_credits: int,
                                    required_credits: int, source: str) -> str:
        """
        Route the user to an upgrade or purchase screen.

        Returns:
            The route name that was chosen
        """
        shortfall = required_credits - current_credits
        logger.info(
            f"Handling insufficient credits: tier={tier} current={current_credits} "
            f"required={required_credits} shortfall={shortfall} source={source}"
        )

        if tier == TIER_PREMIUM:
            route, params = self._premium_route(shortfall, source)
        elif tier == TIER_PRO:
            route, params = Screens.CREDIT_PURCHASE, {
                "recommendedPack": self._recommended_pack(shortfall),
                "source": source,
            }
        else:
            # Free (or unknown) tier: subscription paywall
            route, params = Screens.PAYWALL, {
                "placement": "credits_depleted_free_user",
                "source": source,
            }

        if self.on_route:
            self.on_route(route, params)
        return route

    def _premium_route(self, shortfall: int, source: str):
        if shortfall <= Config.SMALL_SHORTFALL_THRESHOLD:
            return Screens.CREDIT_PURCHASE, {"recommendedPack": "small", "source": source}
        if shortfall <= self.MEDIUM_SHORTFALL_THRESHOLD:
            return Screens.CREDIT_PURCHASE, {
                "recommendedPack": "medium",
                "offerUpgrade": True,
                "source": source,
            }
        return Screens.SUBSCRIPTION, {"upgradeTo": TIER_PRO, "source": source}

    @staticmethod
    def _recommended_pack(shortfall: int) -> str:
        if shortfall <= Config.SMALL_SHORTFALL_THRESHOLD:
            return "small"
        if shortfall <= CreditFlowManager.MEDIUM_SHORTFALL_THRESHOLD:
            return "medium"
        return "large"
