from __future__ import annotations

from dataclasses import dataclass
from html import escape

from termhtml.enums import ElementKind


@dataclass(frozen=True)
class Element:
    """Rich content embedded in a single cell, such as a link or an image."""

    kind: ElementKind
    url: str
    content: str = ""
    width: str | None = None
    height: str | None = None

    @classmethod
    def from_osc_fields(cls, kind: ElementKind, fields: dict[str, str]) -> "Element | None":
        url = fields.get("url", "")
        if not url:
            return None
        content = fields.get("content" if kind == ElementKind.link else "alt", "")
        return cls(
            kind=kind,
            url=url,
            content=content,
            width=fields.get("width") or None,
            height=fields.get("height") or None,
        )

    def as_html(self) -> str:
        url = escape(self.url, quote=True)
        if self.kind == ElementKind.link:
            return f'<a href="{url}">{escape(self.content or self.url)}</a>'
        attrs = [f'src="{url}"', f'alt="{escape(self.content, quote=True)}"']
        if self.width:
            attrs.append(f'width="{escape(self.width, quote=True)}"')
        if self.height:
            attrs.append(f'height="{escape(self.height, quote=True)}"')
        return f"<img {' '.join(attrs)}>"
