"""h2d - convert rendered HTML and CSS into design-tool document trees."""

__version__ = "0.1.0"
