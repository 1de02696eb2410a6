from .user import User, PersonalAccessToken
from .newsletter import Newsletter
from .subscriber import Subscriber
from .campaign import Campaign, CampaignSubscriber, CAMPAIGN_STATUSES

__all__ = [
    "User",
    "PersonalAccessToken",
    "Newsletter",
    "Subscriber",
    "Campaign",
    "CampaignSubscriber",
    "CAMPAIGN_STATUSES",
]
