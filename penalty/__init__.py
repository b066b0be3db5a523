from .config import AppConfig, BanPolicyConfig, configure_logging, load_config
from .rules import GRIEF, NSFW, RULE_INFO, WASTE, Category, Rule, RuleInfo, RuleKind
from .services.ban_timer import (
    DECAY_HORIZON,
    BanTimer,
    ban_expires_at,
    earned_ban_time,
    get_remaining_ban_time,
    is_banned,
    most_recent_first,
)

__all__ = [
    "AppConfig",
    "BanPolicyConfig",
    "BanTimer",
    "Category",
    "DECAY_HORIZON",
    "GRIEF",
    "NSFW",
    "RULE_INFO",
    "Rule",
    "RuleInfo",
    "RuleKind",
    "WASTE",
    "ban_expires_at",
    "configure_logging",
    "earned_ban_time",
    "get_remaining_ban_time",
    "is_banned",
    "load_config",
    "most_recent_first",
]
