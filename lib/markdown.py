# =============================================================================
# lib/markdown.py - Report Markdown to Email HTML
# =============================================================================
# Email clients need inline styles, so the report markdown is converted with
# a fixed sequence of substitutions rather than a full markdown parser.
# Order matters: "###" must be replaced before "##" and "#", and "**" before "*".
# =============================================================================

import re

_RULES: list[tuple[re.Pattern, str]] = [
    (re.compile(r"### (.*)"), r'<h3 style="color:#c9b99a;font-size:1rem;margin:1.2em 0 0.4em;">\1</h3>'),
    (re.compile(r"## (.*)"), r'<h2 style="color:#e8d5b7;font-size:1.15rem;margin:1.4em 0 0.5em;">\1</h2>'),
    (re.compile(r"# (.*)"), r'<h1 style="color:#f5ede0;font-size:1.3rem;margin:1.6em 0 0.6em;">\1</h1>'),
    (re.compile(r"\*\*(.*?)\*\*"), r'<strong style="color:#e8d5b7;">\1</strong>'),
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    (re.compile(r"^- (.*)", re.MULTILINE), r'<li style="margin:0.25em 0;">\1</li>'),
]

# Greedy and dot-all: wraps everything from the first <li to the last </li>
_LIST_BLOCK = re.compile(r"(<li.*</li>)", re.DOTALL)
_LIST_WRAPPER = r'<ul style="padding-left:1.5em;margin:0.5em 0;">\1</ul>'


def render_markdown_to_html(text: str) -> str:
    """
    Render the subset of markdown the stylist model produces.

    Supports headings (#, ##, ###), **bold**, *italic*, "- " bullet lists,
    blank-line paragraph breaks and single-line breaks.

    Example:
        >>> render_markdown_to_html("**Hi**")
        '<strong style="color:#e8d5b7;">Hi</strong>'
    """
    html = text
    for pattern, replacement in _RULES:
        html = pattern.sub(replacement, html)

    html = _LIST_BLOCK.sub(_LIST_WRAPPER, html, count=1)
    html = html.replace("\n\n", '</p><p style="margin:0.75em 0;">')
    html = html.replace("\n", "<br/>")
    return html
