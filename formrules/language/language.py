"""
formrules Language
==================

Message catalogs and placeholder formatting.

Catalogs are plain Python files laid out as
``<directory>/<locale>/<domain>.py`` and define a ``messages`` dict.
The built-in directory ships ``en`` and ``pt-br`` for the
``validation`` domain; extra directories (added at runtime or through
``validation.language_directories``) override individual lines.

Example:
    language = Language("pt-br")
    language.render("validation", "required", {"field": "Nome"})
    # "O campo Nome é obrigatório."

    language.format_message("Field {field} needs {0} chars.", {"field": "name", "0": 5})
    # "Field name needs 5 chars."
"""

from __future__ import annotations

import importlib.util
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from formrules.core.config import get_config
from formrules.utils.logger import get_logger

BUILTIN_DIRECTORY = Path(__file__).parent / "locales"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

logger = get_logger("formrules.language")


def normalize_locale(locale: str) -> str:
    """``pt_BR`` and ``pt-BR`` both become ``pt-br``."""
    return locale.strip().replace("_", "-").lower()


def format_message(template: str, args: Optional[Mapping[Any, Any]] = None) -> str:
    """
    Replace ``{name}`` placeholders with values from args.

    Keys are matched by their string form, so positional arguments may
    be given as ``0`` or ``"0"``. Unknown placeholders are left as-is.
    """
    if not args:
        return template

    values = {str(key): value for key, value in args.items()}

    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in values:
            return match.group(0)
        return str(values[key])

    return _PLACEHOLDER.sub(replace, template)


class Language:
    """
    Localized message renderer.

    Args:
        locale: Locale to render, defaults to ``validation.locale``
        fallback: Locale used for missing lines, defaults to
            ``validation.fallback_locale``
        directories: Extra catalog directories
    """

    def __init__(
        self,
        locale: Optional[str] = None,
        fallback: Optional[str] = None,
        directories: Optional[List[Union[str, Path]]] = None,
    ) -> None:
        settings = get_config()
        self.locale = normalize_locale(locale or settings.get("validation.locale", "en"))
        self.fallback = normalize_locale(
            fallback or settings.get("validation.fallback_locale", "en")
        )
        self._directories: List[Path] = [BUILTIN_DIRECTORY]
        self._catalogs: Dict[Tuple[str, str], Dict[str, str]] = {}

        for directory in settings.get_list("validation.language_directories"):
            self.add_directory(directory)
        for directory in directories or []:
            self.add_directory(directory)

    @property
    def directories(self) -> List[Path]:
        return list(self._directories)

    def add_directory(self, directory: Union[str, Path]) -> Language:
        """Add a catalog directory; its lines override earlier directories."""
        path = Path(directory)
        if path not in self._directories:
            self._directories.append(path)
            self._catalogs.clear()
        return self

    def set_locale(self, locale: str) -> Language:
        self.locale = normalize_locale(locale)
        return self

    def available_locales(self) -> List[str]:
        """Locales with at least one catalog directory."""
        found = set()
        for directory in self._directories:
            if directory.is_dir():
                found.update(item.name for item in directory.iterdir() if item.is_dir())
        found.discard("__pycache__")
        return sorted(found)

    def _load_file(self, path: Path) -> Dict[str, str]:
        """Load the ``messages`` dict from a catalog file."""
        spec = importlib.util.spec_from_file_location(f"formrules_catalog_{path.stem}", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        return dict(getattr(module, "messages", {}))

    def get_catalog(self, domain: str, locale: Optional[str] = None) -> Dict[str, str]:
        """All lines of a domain for a locale, merged across directories."""
        locale = normalize_locale(locale or self.locale)
        key = (locale, domain)

        if key not in self._catalogs:
            lines: Dict[str, str] = {}
            for directory in self._directories:
                path = directory / locale / f"{domain}.py"
                if path.is_file():
                    lines.update(self._load_file(path))
            self._catalogs[key] = lines

        return self._catalogs[key]

    def get_line(self, domain: str, key: str, locale: Optional[str] = None) -> Optional[str]:
        """Template for a key, trying the locale then the fallback locale."""
        for candidate in (locale or self.locale, self.fallback):
            line = self.get_catalog(domain, candidate).get(key)
            if line is not None:
                return line

        logger.debug("Missing language line", domain=domain, key=key, locale=locale or self.locale)
        return None

    def render(
        self,
        domain: str,
        key: str,
        args: Optional[Mapping[Any, Any]] = None,
        locale: Optional[str] = None,
    ) -> str:
        """
        Render a catalog line.

        Returns ``"<domain>.<key>"`` when no catalog defines the line.
        """
        line = self.get_line(domain, key, locale)
        if line is None:
            return f"{domain}.{key}"
        return format_message(line, args)

    def format_message(self, template: str, args: Optional[Mapping[Any, Any]] = None) -> str:
        return format_message(template, args)
