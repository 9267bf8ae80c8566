from __future__ import annotations

from dataclasses import dataclass, field

from h2d.model.design import WindingRule
from h2d.model.resources import Viewport


@dataclass(frozen=True)
class ConversionConfig:
    root_font_size: float = 16.0  # em/rem are resolved against this, not the element
    default_font_family: str = "Inter"
    default_font_size: float = 16.0
    winding_rule: WindingRule = WindingRule.NONZERO
    font_mappings: dict[str, str] = field(default_factory=dict)
    document_name: str = "Document"
    page_name: str = "Page 1"
    background_color: str = "#ffffff"
    default_viewport: Viewport = field(default_factory=lambda: Viewport(1440, 900))
    fetch_timeout: float = 10.0
    user_agent: str = "Mozilla/5.0 (compatible; h2d/0.1)"
    include_metadata: bool = True
