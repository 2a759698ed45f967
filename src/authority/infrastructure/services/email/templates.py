"""Built-in email templates."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailTemplate:
    html_body: str
    text_body: str


WELCOME_HTML = """\
<html>
  <body>
    <h2>Welcome to {{ app_name }}</h2>
    <p>An account was created for {{ email }}.</p>
    <p>To activate it, follow this link:</p>
    <p><a href="{{ activation_url }}">{{ activation_url }}</a></p>
    <p>Or use this activation code: <code>{{ activation_code }}</code></p>
    <p>If you did not create this account, you can safely ignore this email.</p>
  </body>
</html>
"""

WELCOME_TEXT = """\
Welcome to {{ app_name }}

An account was created for {{ email }}.

To activate it, follow this link:
{{ activation_url }}

Or use this activation code: {{ activation_code }}

If you did not create this account, you can safely ignore this email.
"""

BUILTIN_TEMPLATES: dict[str, EmailTemplate] = {
    "auth/welcome": EmailTemplate(html_body=WELCOME_HTML, text_body=WELCOME_TEXT),
}
