"""
Site Configuration

Loads site.yaml onto the SiteConfig structured schema with OmegaConf. Keys
not declared on the schema are rejected, values are type-checked, and
command-line overrides are merged last.

Example site.yaml:

    sitename: Notes from the Attic
    author: Jane Doe
    siteurl: https://blog.example.com
    max_feed_entries: 20
    github_user: janedoe
    github_access_token: ${oc.env:GITHUB_ACCESS_TOKEN,null}
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

load_dotenv()

DEFAULT_THEME_PATH = Path(__file__).resolve().parent.parent / "contexts" / "rendering" / "theme"


class SiteConfigError(ValueError):
    """Raised when the site configuration file is missing or invalid."""


@dataclass
class SiteConfig:
    """
    Site-wide settings used by rendering, feeds, and stats.

    Attributes:
        sitename: Site title (feed and index page title)
        author: Author name used in feeds
        siteurl: Absolute base URL, joined with article URLs in feeds
        max_feed_entries: Maximum number of entries per feed
        feed_all_rss: Output path of the RSS feed, relative to the output directory
        feed_all_atom: Output path of the Atom feed, relative to the output directory
        theme_path: Directory with templates and style.css (None = bundled theme)
        github_user: GitHub user whose repositories feed the language stats
        github_access_token: Token for the GitHub API (falls back to GITHUB_ACCESS_TOKEN)
        stats_output: Output path of the language stats script
    """

    sitename: str = "Plume"
    author: str = ""
    siteurl: str = ""
    max_feed_entries: int = 10
    feed_all_rss: str = "feeds/all.rss.xml"
    feed_all_atom: str = "feeds/all.atom.xml"
    theme_path: Optional[str] = None
    github_user: Optional[str] = None
    github_access_token: Optional[str] = None
    stats_output: str = "js/languages.js"

    @property
    def theme_dir(self) -> Path:
        """Resolved theme directory."""
        if self.theme_path:
            return Path(self.theme_path)
        return DEFAULT_THEME_PATH


def load_site_config(config_path: Optional[Path] = None, **overrides) -> SiteConfig:
    """
    Load site configuration, merging file values and overrides onto the defaults.

    Args:
        config_path: Path to site.yaml (None = defaults only)
        **overrides: Values taking precedence over the file (None values are ignored)

    Returns:
        Validated SiteConfig

    Raises:
        SiteConfigError: If the file is missing, has unknown keys, or has invalid values
    """
    sources = [OmegaConf.structured(SiteConfig)]

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise SiteConfigError(f"Site config not found: {config_path}")
        sources.append(OmegaConf.load(config_path))

    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        sources.append(OmegaConf.create(overrides))

    try:
        config = OmegaConf.to_object(OmegaConf.merge(*sources))
    except OmegaConfBaseException as e:
        raise SiteConfigError(f"Invalid site config ({config_path or 'defaults'}): {e}") from e

    if config.max_feed_entries < 0:
        raise SiteConfigError(
            f"max_feed_entries must be >= 0, got: {config.max_feed_entries}"
        )

    if not config.github_access_token:
        config.github_access_token = os.getenv("GITHUB_ACCESS_TOKEN") or None

    return config
