"""Recovery Recommendation configuration"""

from .settings import RecoverySettings, settings

__all__ = ["RecoverySettings", "settings"]
