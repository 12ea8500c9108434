from __future__ import annotations

from html import escape

from termhtml.config import settings

# Named colours follow pyte.graphics; bright variants are prefixed "bright".
PREVIEW_CSS = """
body { background: #171717; margin: 0; padding: 1em; }
.term-container { color: #dedede; font-family: Monaco, Menlo, Consolas, monospace; font-size: 12px; line-height: 1.4; white-space: pre-wrap; word-break: break-word; }
.term-container a { color: inherit; }
.term-bold { font-weight: bold; }
.term-faint { opacity: 0.6; }
.term-italic { font-style: italic; }
.term-underline { text-decoration: underline; }
.term-strike { text-decoration: line-through; }
.term-blink { animation: term-blink 1s step-end infinite; }
@keyframes term-blink { 50% { opacity: 0; } }
.term-fg-black { color: #2e3436; } .term-bg-black { background-color: #2e3436; }
.term-fg-red { color: #e1635b; } .term-bg-red { background-color: #e1635b; }
.term-fg-green { color: #5fb05a; } .term-bg-green { background-color: #5fb05a; }
.term-fg-brown { color: #dcb442; } .term-bg-brown { background-color: #dcb442; }
.term-fg-blue { color: #4f8ed9; } .term-bg-blue { background-color: #4f8ed9; }
.term-fg-magenta { color: #c26acb; } .term-bg-magenta { background-color: #c26acb; }
.term-fg-cyan { color: #4fb8c2; } .term-bg-cyan { background-color: #4fb8c2; }
.term-fg-white { color: #dedede; } .term-bg-white { background-color: #dedede; }
.term-fg-brightblack { color: #757575; } .term-bg-brightblack { background-color: #757575; }
.term-fg-brightred { color: #ff8a80; } .term-bg-brightred { background-color: #ff8a80; }
.term-fg-brightgreen { color: #8fdc83; } .term-bg-brightgreen { background-color: #8fdc83; }
.term-fg-brightbrown { color: #ffe57f; } .term-bg-brightbrown { background-color: #ffe57f; }
.term-fg-brightblue { color: #82b1ff; } .term-bg-brightblue { background-color: #82b1ff; }
.term-fg-brightmagenta { color: #ea80fc; } .term-bg-brightmagenta { background-color: #ea80fc; }
.term-fg-brightcyan { color: #84ffff; } .term-bg-brightcyan { background-color: #84ffff; }
.term-fg-brightwhite { color: #ffffff; } .term-bg-brightwhite { background-color: #ffffff; }
.term-inverse { filter: invert(100%); }
""".strip()


def wrap_preview(html: str, title: str | None = None) -> str:
    """Embed a rendered fragment in a standalone HTML page."""
    page_title = escape(title or settings.preview_title)
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{page_title}</title>\n"
        f"<style>\n{PREVIEW_CSS}\n</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="term-container">{html}</div>\n'
        "</body>\n"
        "</html>\n"
    )
