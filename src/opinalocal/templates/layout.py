"""Email layout shared by every HTML email.

The layout file is read once per process. Callers receive an immutable
``EmailLayout`` and hand it to ``render_email``.
"""

import html
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from string import Template

LAYOUT_PATH = Path(__file__).with_name("email_layout.html")


@dataclass(frozen=True)
class EmailLayout:
    template: Template
    sender: str

    def render(self, subject, body, action_url="#"):
        paragraphs = "".join(f"<p>{html.escape(line)}</p>" for line in body.split("\n") if line.strip())
        return self.template.safe_substitute(
            subject=html.escape(subject or ""),
            body=paragraphs,
            action_url=html.escape(action_url or "#", quote=True),
        )


@lru_cache(maxsize=1)
def get_email_layout(sender="OpinaLocal <nao-responda@opinalocal.com.br>"):
    return EmailLayout(template=Template(LAYOUT_PATH.read_text(encoding="utf-8")), sender=sender)


def render_email(layout, subject, body, action_url="#"):
    """Wrap a plain-text template body in the HTML layout."""
    return layout.render(subject, body, action_url)
