from h2d.selectors.matcher import SelectorMatcher, simple_match
from h2d.selectors.specificity import specificity

__all__ = ["SelectorMatcher", "simple_match", "specificity"]
