"""Jinja2 template renderer for notification emails.

Templates are rendered in a sandbox with HTML autoescaping and strict
undefined handling, so a template referencing missing data fails loudly.
"""

from typing import Any, Mapping

from jinja2 import StrictUndefined, TemplateSyntaxError, UndefinedError
from jinja2.sandbox import SandboxedEnvironment

from authority.core.logging import get_logger
from authority.infrastructure.services.email.templates import BUILTIN_TEMPLATES, EmailTemplate

logger = get_logger(__name__)


class UnknownTemplateError(LookupError):
    """Raised when no template is registered under a name."""


class RenderedEmail:
    """Text and HTML bodies of a rendered template."""

    __slots__ = ("html_body", "text_body")

    def __init__(self, html_body: str, text_body: str) -> None:
        self.html_body = html_body
        self.text_body = text_body


class TemplateRenderer:
    """Renders registered email templates with Jinja2."""

    def __init__(self, templates: Mapping[str, EmailTemplate] | None = None) -> None:
        """Initialize the renderer.

        Args:
            templates: Templates by name. Defaults to the built-in templates.
        """
        self.templates = dict(BUILTIN_TEMPLATES if templates is None else templates)
        self.html_env = SandboxedEnvironment(
            autoescape=True,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.text_env = SandboxedEnvironment(
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_string(self, template_string: str, variables: Mapping[str, Any], html: bool = True) -> str:
        """Render a template string with variables.

        Raises:
            TemplateSyntaxError: If template syntax is invalid.
            UndefinedError: If required variable is missing.
        """
        env = self.html_env if html else self.text_env
        try:
            return env.from_string(template_string).render(**variables)
        except TemplateSyntaxError as e:
            logger.error("Template syntax error", error=str(e), line=e.lineno)
            raise
        except UndefinedError as e:
            logger.error("Undefined variable in template", error=str(e))
            raise

    def render(self, template_name: str, variables: Mapping[str, Any]) -> RenderedEmail:
        """Render both bodies of a registered template.

        Raises:
            UnknownTemplateError: If the template name is not registered.
        """
        template = self.templates.get(template_name)
        if template is None:
            raise UnknownTemplateError(f"Unknown email template: {template_name}")

        rendered = RenderedEmail(
            html_body=self.render_string(template.html_body, variables, html=True),
            text_body=self.render_string(template.text_body, variables, html=False),
        )
        logger.debug("Template rendered", template=template_name, variable_count=len(variables))
        return rendered
