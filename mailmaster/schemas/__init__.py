from .auth import UserCreate, UserLogin, UserResponse, RegisterResponse, LoginResponse, MessageResponse
from .newsletter import NewsletterCreate, NewsletterUpdate, NewsletterResponse
from .subscriber import SubscriberCreate, SubscriberUpdate, SubscriberResponse
from .campaign import (
    CampaignStatus,
    CampaignCreate,
    CampaignUpdate,
    CampaignResponse,
    CampaignSubscriberResponse,
    OpenStateResponse,
)

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "RegisterResponse", "LoginResponse", "MessageResponse",
    "NewsletterCreate", "NewsletterUpdate", "NewsletterResponse",
    "SubscriberCreate", "SubscriberUpdate", "SubscriberResponse",
    "CampaignStatus", "CampaignCreate", "CampaignUpdate", "CampaignResponse",
    "CampaignSubscriberResponse", "OpenStateResponse",
]
