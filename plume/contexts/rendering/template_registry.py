from pathlib import Path
from typing import Dict

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from plume.utils.site_config import DEFAULT_THEME_PATH

STYLESHEET_NAME = "style.css"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 theme templates.

    Templates live in the theme directory as {name}.{html,xml}.jinja, next to
    the theme's style.css. HTML and XML templates are autoescaped, so article
    HTML must be passed through the `safe` filter.
    """

    def __init__(self, theme_path: Path = None):
        """
        Initialize the template registry.

        Args:
            theme_path: Theme directory. Defaults to the bundled theme
                        (plume/contexts/rendering/theme/)
        """
        if theme_path is None:
            theme_path = DEFAULT_THEME_PATH

        self.theme_path = Path(theme_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.theme_path)),
            autoescape=select_autoescape(enabled_extensions=("html.jinja", "xml.jinja")),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by file name, loading and caching it if necessary.

        Args:
            name: Template file name relative to the theme (e.g., 'article.html.jinja')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.get_template_path(name)}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a theme template."""
        return self.theme_path / name

    def read_stylesheet(self) -> str:
        """Read the theme's style.css (inlined into every page); empty if the theme has none."""
        stylesheet = self.theme_path / STYLESHEET_NAME
        if not stylesheet.exists():
            return ""
        return stylesheet.read_text(encoding="utf-8")

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is in the cache."""
        return name in self._cache
