"""Body templates for notification payloads.

Templates are Jinja2 sources configured per notification target. They are
rendered with one of two contexts:

- Full context: every field of the incident is a top-level variable
  (``{{ subject }}``, ``{{ alert_key }}``, ``{{ tags.host }}``) and the
  incident itself is available as ``{{ incident }}``.
- Flat context: the pre-selected subject or body string is available as
  ``{{ payload }}``.

Undefined variables are render errors.
"""

from functools import lru_cache
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from notifier.exceptions import TemplateRenderError

_environment = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=True,
)


def check_template_syntax(source: str) -> None:
    """Parse a template source without rendering it.

    Raises:
        TemplateRenderError: If the source is not a valid template.
    """
    try:
        _environment.parse(source)
    except TemplateError as e:
        raise TemplateRenderError(f"invalid body template: {e}") from e


@lru_cache(maxsize=256)
def compile_template(source: str) -> Template:
    """Compile (and cache) a template source."""
    try:
        return _environment.from_string(source)
    except TemplateError as e:
        raise TemplateRenderError(f"invalid body template: {e}") from e


def render_template(source: str, context: Mapping[str, Any]) -> str:
    """Render a template source with the given context.

    Args:
        source: Jinja2 template source.
        context: Variables exposed to the template.

    Returns:
        The rendered text.

    Raises:
        TemplateRenderError: If compilation or rendering fails.
    """
    template = compile_template(source)
    try:
        return template.render(**context)
    except Exception as e:
        raise TemplateRenderError(f"failed to render body template: {e}") from e
