"""
Plan Entitlement Gate

Pure function of a subscription's plan slug and status. It never touches
storage; callers load the subscription first.
"""

from typing import Dict, FrozenSet, Optional

from bizhub.domain.entities import Subscription, SubscriptionStatus

FEATURE_CUSTOM_DOMAIN = "custom_domain"

# Plan slugs that unlock each gated feature
FEATURE_PLANS: Dict[str, FrozenSet[str]] = {
    FEATURE_CUSTOM_DOMAIN: frozenset({"avancado"}),
}

ENTITLED_STATUSES = frozenset({SubscriptionStatus.active, SubscriptionStatus.trial})


def is_feature_enabled(subscription: Optional[Subscription], feature_key: str) -> bool:
    if subscription is None or subscription.status not in ENTITLED_STATUSES:
        return False

    plans = FEATURE_PLANS.get(feature_key)
    if not plans or subscription.plan is None:
        return False

    return subscription.plan.slug in plans
