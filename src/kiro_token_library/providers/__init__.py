from .builder_id_auth import BuilderIdTokenExchanger
from .exchanger_interface import TokenExchanger
from .social_auth import SocialTokenExchanger
from .utilities.kiro_quota_tracker import KiroUsageFetcher, normalize_usage

__all__ = [
    "TokenExchanger",
    "BuilderIdTokenExchanger",
    "SocialTokenExchanger",
    "KiroUsageFetcher",
    "normalize_usage",
]
