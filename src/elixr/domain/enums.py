from enum import StrEnum

class PlanFrequency(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

class SubscriptionStatus(StrEnum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

class SubscriptionType(StrEnum):
    JUICES = "juices"
    FRUIT_BOWLS = "fruit_bowls"
    CUSTOMIZED = "customized"

class ExpiryStatus(StrEnum):
    ACTIVE = "active"
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
