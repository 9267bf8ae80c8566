from h2d.converters.animation import (
    AnimationInfo,
    InteractionState,
    animation_metadata,
    extract_animations,
    extract_interactions,
    parse_duration,
)
from h2d.converters.document import ConversionContext, build_document, color_styles, convert
from h2d.converters.tree import TreeBuilder
from h2d.converters.vector import VectorConverter, convert_svg, placeholder_node, validate_path_data

__all__ = [
    "AnimationInfo",
    "ConversionContext",
    "InteractionState",
    "TreeBuilder",
    "VectorConverter",
    "animation_metadata",
    "build_document",
    "color_styles",
    "convert",
    "convert_svg",
    "extract_animations",
    "extract_interactions",
    "parse_duration",
    "placeholder_node",
    "validate_path_data",
]
