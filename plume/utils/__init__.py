"""
Shared utilities for PLUME.

Common functionality used across contexts:
- Logging setup and site event log
- Timestamp formatting
- HTML and URL helpers
- Site configuration
"""

from plume.utils.site_config import SiteConfig, SiteConfigError, load_site_config
from plume.utils.timestamp import now, now_exact

__all__ = ["SiteConfig", "SiteConfigError", "load_site_config", "now", "now_exact"]
