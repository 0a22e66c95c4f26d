"""Jinja2 template rendering for project scaffolding.

Provides the ``TemplateRenderer`` class which loads Jinja2 templates from the
``screamgen/scaffolder/templates/`` directory (optionally shadowed by a user
override directory) and renders them with project-specific context data.

Placeholders use ``${dotted.path}`` rather than Jinja's ``{{ }}`` so that the
bulk of a template reads like the file it produces.  A placeholder body that
is a dotted path (segments may contain hyphens), or that is not a valid Jinja
expression at all, is resolved by walking the context one key at a time.  If
any segment is missing the placeholder is written back out verbatim
(``${user.missing}``) and a ``TemplateResolutionWarning`` is issued; rendering
never fails because of a missing key.  Any other body (``${ x | upper }``,
``${ "a" if flag else "b" }``) is an ordinary Jinja expression.  Block tags
(``{% if %}``, ``{% for %}``) keep their Jinja syntax.

Placeholder bodies cannot contain ``}``.  Generated files that need a literal
``${`` (shell, Compose) must wrap it in ``{% raw %}`` or receive it through a
context value.
"""

from __future__ import annotations

import json
import re
import warnings
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional

from jinja2 import (
    ChainableUndefined,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
    Undefined,
    pass_context,
    select_autoescape,
)
from jinja2.ext import Extension
from jinja2.runtime import Context

from .errors import TemplateResolutionWarning, TemplateSourceError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

PLACEHOLDER_START = "${"
PLACEHOLDER_END = "}"
_PLACEHOLDER_FILTER = "placeholder"
_PLACEHOLDER_ROOT = "placeholder_root"

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_DOTTED_PATH_RE = re.compile(r"[A-Za-z_][\w-]*(?:\.[\w-]+)*")
_RAW_BLOCK_RE = re.compile(r"(\{%-?\s*raw\s*-?%\}.*?\{%-?\s*endraw\s*-?%\})", re.DOTALL)

# Names the Jinja parser reads as literals or operators, never as variables
_RESERVED_NAMES = frozenset(
    {"and", "or", "not", "in", "is", "if", "else",
     "true", "false", "none", "True", "False", "None"}
)

_UNRESOLVED = object()


# ---------------------------------------------------------------------------
# Fail-open placeholders
# ---------------------------------------------------------------------------


class PlaceholderExtension(Extension):
    """Rewrite path placeholders into calls of the ``placeholder`` filter.

    ``${a.b.c}`` becomes ``${ a|placeholder("a.b.c") }``: Jinja resolves the
    root name (so loop variables work) and the filter walks the rest.  When
    the root is not a plain identifier (``${user-name}``, ``${user name}``)
    it is looked up in the template context by ``placeholder_root``.
    Bodies inside ``{% raw %}`` blocks are left alone.
    """

    def preprocess(
        self, source: str, name: Optional[str], filename: Optional[str] = None
    ) -> str:
        parts = _RAW_BLOCK_RE.split(source)
        for index in range(0, len(parts), 2):
            parts[index] = _PLACEHOLDER_RE.sub(self._rewrite, parts[index])
        return "".join(parts)

    def _rewrite(self, match: re.Match[str]) -> str:
        body = match.group(1)
        path = body.strip()
        if not _DOTTED_PATH_RE.fullmatch(path) and self._is_expression(path):
            return match.group(0)

        root = path.split(".", 1)[0]
        if not root.isidentifier() or root in _RESERVED_NAMES:
            root = f"{_PLACEHOLDER_ROOT}({_jinja_string(root)})"
        newlines = "\n" * body.count("\n")
        return (
            f"{PLACEHOLDER_START} {root}|{_PLACEHOLDER_FILTER}({_jinja_string(path)})"
            f"{newlines} {PLACEHOLDER_END}"
        )

    def _is_expression(self, text: str) -> bool:
        try:
            self.environment.compile_expression(text)
        except TemplateSyntaxError:
            return False
        return True


def _jinja_string(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _walk(value: Any, segments: list[str]) -> Any:
    """Follow *segments* from *value*; ``_UNRESOLVED`` if any step is missing."""
    if value is _UNRESOLVED or isinstance(value, Undefined):
        return _UNRESOLVED
    for segment in segments:
        if isinstance(value, Mapping):
            if segment not in value:
                return _UNRESOLVED
            value = value[segment]
        elif (
            isinstance(value, Sequence)
            and not isinstance(value, str)
            and segment.isdigit()
        ):
            index = int(segment)
            if index >= len(value):
                return _UNRESOLVED
            value = value[index]
        else:
            value = getattr(value, segment, _UNRESOLVED)
            if value is _UNRESOLVED:
                return _UNRESOLVED
    return value


@pass_context
def _placeholder_root(context: Context, name: str) -> Any:
    return context.get(name, _UNRESOLVED)


@pass_context
def _placeholder_filter(context: Context, root: Any, path: str) -> Any:
    value = _walk(root, path.split(".")[1:])
    if value is _UNRESOLVED:
        source = context.name or "<string>"
        warnings.warn(
            f"{source}: unresolved placeholder {PLACEHOLDER_START}{path}{PLACEHOLDER_END}",
            TemplateResolutionWarning,
            stacklevel=2,
        )
        return f"{PLACEHOLDER_START}{path}{PLACEHOLDER_END}"
    return value


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders scaffolding templates.

    The renderer discovers ``.j2`` template files under the bundled template
    directory.  When *override_dir* is given, a template with the same
    relative name there wins over the bundled one.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        override_dir: str | Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.override_dir = Path(override_dir) if override_dir else None

        loaders = [FileSystemLoader(str(self.template_dir))]
        if self.override_dir is not None:
            loaders.insert(0, FileSystemLoader(str(self.override_dir)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            variable_start_string=PLACEHOLDER_START,
            variable_end_string=PLACEHOLDER_END,
            undefined=ChainableUndefined,
            extensions=[PlaceholderExtension],
        )
        self.env.filters[_PLACEHOLDER_FILTER] = _placeholder_filter
        self.env.globals[_PLACEHOLDER_ROOT] = _placeholder_root
        self.env.filters["js_string"] = _js_string_filter

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"domain/entity.js.j2"``).
            context: Dictionary of variables available inside the template.

        Raises:
            TemplateSourceError: If the template is missing or malformed.
        """
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as exc:
            raise TemplateSourceError(f"Template not found: {exc.name}") from exc
        except TemplateSyntaxError as exc:
            raise TemplateSourceError(
                f"Template {template_path} is malformed (line {exc.lineno}): {exc.message}"
            ) from exc
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render inline template text with the provided context.

        ``render_string("Hello ${user.name}!", {"user": {"name": "Ana"}})``
        returns ``"Hello Ana!"``.
        """
        try:
            template = self.env.from_string(template_string)
        except TemplateSyntaxError as exc:
            raise TemplateSourceError(
                f"Inline template is malformed (line {exc.lineno}): {exc.message}"
            ) from exc
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template roots; overrides are included.
        """
        found: set[str] = set()
        for root in filter(None, (self.template_dir, self.override_dir)):
            search_dir = root / prefix if prefix else root
            if not search_dir.is_dir():
                continue
            found.update(
                p.relative_to(root).as_posix() for p in search_dir.rglob("*.j2")
            )
        return sorted(found)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _js_string_filter(value: Any) -> str:
    """Quote *value* as a single-quoted JavaScript string literal."""
    text = json.dumps(str(value), ensure_ascii=False)[1:-1]
    text = text.replace('\\"', '"').replace("'", "\\'")
    return f"'{text}'"
