import copy

import pytest

VALID_CAPTURE = {
    "version": "1.0",
    "html": "<div><p>Hello</p><img src=\"https://example.com/a.png\"></div>",
    "css": "p { color: red }",
    "resources": {
        "images": [
            {
                "url": "https://example.com/a.png",
                "data": "YWJj",
                "mimeType": "image/png",
                "width": 10,
                "height": 20,
                "alt": "A",
            }
        ],
        "fonts": [{"family": "Inter", "weight": 400, "style": "normal"}],
        "stylesheets": [],
        "scripts": [],
    },
    "viewport": {"width": 1280, "height": 720, "deviceScaleFactor": 2},
    "metadata": {
        "url": "https://example.com",
        "timestamp": "2024-01-01T00:00:00Z",
        "title": "Example",
        "theme": "dark",
    },
}


@pytest.fixture
def capture():
    """A fresh, valid capture bundle that tests may mutate."""
    return copy.deepcopy(VALID_CAPTURE)
