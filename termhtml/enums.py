from __future__ import annotations

from enum import Enum


class ElementKind(str, Enum):
    link = "link"
    image = "image"


class OutputFormat(str, Enum):
    html = "html"
    text = "text"
