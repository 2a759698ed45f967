"""Unit tests for email template rendering."""

import pytest
from jinja2 import TemplateSyntaxError, UndefinedError

from authority.domain.services import ACTIVATION_TEMPLATE
from authority.infrastructure.services.email import TemplateRenderer, UnknownTemplateError
from authority.infrastructure.services.email.templates import EmailTemplate

WELCOME_DATA = {
    "app_name": "Authority",
    "email": "alice@example.com",
    "user_id": "user-1",
    "activation_code": "abc123",
    "activation_url": "http://auth.test/users/user-1/activate/abc123",
}


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestTemplateRenderer:
    """Tests for TemplateRenderer."""

    def test_activation_template_is_registered(self, renderer):
        """Test that the service's activation template exists."""
        assert ACTIVATION_TEMPLATE in renderer.templates

    def test_render_welcome_template(self, renderer):
        rendered = renderer.render(ACTIVATION_TEMPLATE, WELCOME_DATA)

        assert "Welcome to Authority" in rendered.text_body
        assert WELCOME_DATA["activation_url"] in rendered.text_body
        assert "abc123" in rendered.text_body
        assert f'href="{WELCOME_DATA["activation_url"]}"' in rendered.html_body

    def test_html_body_is_escaped(self, renderer):
        data = dict(WELCOME_DATA, email="<script>@example.com")

        rendered = renderer.render(ACTIVATION_TEMPLATE, data)

        assert "&lt;script&gt;" in rendered.html_body
        assert "<script>@example.com" in rendered.text_body

    def test_missing_variable_fails(self, renderer):
        """Test strict undefined handling."""
        data = {k: v for k, v in WELCOME_DATA.items() if k != "activation_url"}

        with pytest.raises(UndefinedError):
            renderer.render(ACTIVATION_TEMPLATE, data)

    def test_unknown_template(self, renderer):
        with pytest.raises(UnknownTemplateError, match="auth/nope"):
            renderer.render("auth/nope", WELCOME_DATA)

    def test_custom_templates(self):
        renderer = TemplateRenderer({"hello": EmailTemplate("<b>{{ name }}</b>", "{{ name }}")})

        rendered = renderer.render("hello", {"name": "Ada & Co"})

        assert rendered.html_body == "<b>Ada &amp; Co</b>"
        assert rendered.text_body == "Ada & Co"

    def test_syntax_error(self, renderer):
        with pytest.raises(TemplateSyntaxError):
            renderer.render_string("{% if %}", {})

    def test_sandbox_blocks_unsafe_attribute_access(self, renderer):
        """Test that templates cannot reach into Python internals."""
        from jinja2.exceptions import SecurityError

        with pytest.raises(SecurityError):
            renderer.render_string("{{ ''.__class__.__mro__[1].__subclasses__() }}", {})
