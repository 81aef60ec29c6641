"""
GitHub Language Statistics

Sums the language byte counts of every repository owned by a GitHub user and
renders them as a small JavaScript snippet for the site:

    var languages = {"Python": 61.25, "Rust": 38.75};

Repositories are listed 100 per page, following the `next` link of each
response. The per-repository language requests of a page run concurrently on
a single httpx.AsyncClient.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Dict, List, Optional

import httpx
from dotenv import load_dotenv

from plume.contexts.stats.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_language_totals,
)
from plume.utils.site_config import SiteConfig

load_dotenv()
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")
REPOS_PER_PAGE = 100
REQUEST_TIMEOUT_S = 30.0


def _github_headers(token: Optional[str]) -> Dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def _list_repositories(client: httpx.AsyncClient, user: str) -> List[dict]:
    """Follow the paginated repository listing of a user to the last page."""
    repos = []
    url = f"/users/{user}/repos"
    params = {"per_page": REPOS_PER_PAGE}

    while url:
        response = await client.get(url, params=params)
        response.raise_for_status()
        page = response.json()
        repos.extend(page)
        _log_debug(f"Listed {len(page)} repositories from {response.url}")

        # The next link already carries the query string
        url = response.links.get("next", {}).get("url")
        params = None

    return repos


async def _repository_languages(client: httpx.AsyncClient, user: str, repo: str) -> Dict[str, int]:
    response = await client.get(f"/repos/{user}/{repo}/languages")
    response.raise_for_status()
    return response.json()


async def fetch_bytes_per_language(
    user: str,
    token: Optional[str] = None,
    base_url: str = GITHUB_API_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, int]:
    """
    Sum language byte counts over all repositories of a GitHub user.

    Args:
        user: GitHub user name
        token: Access token, sent as a bearer token when given
        base_url: GitHub API root (default: GITHUB_API_URL)
        transport: Custom httpx transport (e.g., httpx.MockTransport in tests)

    Returns:
        Dict mapping language name to total bytes

    Raises:
        httpx.HTTPError: If any GitHub request fails
    """
    async with httpx.AsyncClient(
        base_url=base_url,
        headers=_github_headers(token),
        timeout=REQUEST_TIMEOUT_S,
        transport=transport,
    ) as client:
        repos = await _list_repositories(client, user)
        if not repos:
            _log_warning(f"No public repositories found for {user}")
        per_repo = await asyncio.gather(
            *(_repository_languages(client, user, repo["name"]) for repo in repos)
        )

    bytes_per_language: Dict[str, int] = {}
    for languages in per_repo:
        for language, num_bytes in languages.items():
            bytes_per_language[language] = bytes_per_language.get(language, 0) + num_bytes

    log_language_totals(user, len(repos), bytes_per_language)
    return bytes_per_language


def format_languages_js(bytes_per_language: Dict[str, int]) -> str:
    """
    Render language byte counts as percentages in a JavaScript variable.

    Languages are ordered by size, largest first. An empty (or all-zero)
    input produces an empty object.

    Example:
        >>> format_languages_js({"Python": 300, "Rust": 100})
        'var languages = {"Python": 75.0, "Rust": 25.0};'
    """
    total = sum(bytes_per_language.values())
    fractions = {}
    if total > 0:
        ranked = sorted(bytes_per_language.items(), key=lambda item: (-item[1], item[0]))
        fractions = {language: round(n / total * 100, 2) for language, n in ranked}
    return f"var languages = {json.dumps(fractions)};"


def write_language_stats(
    config: SiteConfig,
    output_dir: Path,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Path:
    """
    Fetch the configured user's language stats and write them into the site.

    Args:
        config: Site configuration (github_user, github_access_token, stats_output)
        output_dir: Build output directory
        transport: Custom httpx transport (tests)

    Returns:
        Path of the written script

    Raises:
        ValueError: If no github_user is configured
        httpx.HTTPError: If any GitHub request fails
    """
    if not config.github_user:
        raise ValueError("github_user must be set to collect language stats")

    _log_info(f"Fetching language stats for {config.github_user}")
    bytes_per_language = asyncio.run(
        fetch_bytes_per_language(
            config.github_user,
            token=config.github_access_token,
            base_url=GITHUB_API_URL,
            transport=transport,
        )
    )
    destination = Path(output_dir) / config.stats_output
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(format_languages_js(bytes_per_language) + "\n", encoding="utf-8")
    return destination
