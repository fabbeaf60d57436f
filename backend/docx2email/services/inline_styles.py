"""
Inline-style pass for the responsive dialect.

Email clients drop or ignore <style> blocks unpredictably, so every element
gets its policy declarations written into its own style attribute. The
author's declarations are kept and placed last, so they win under the
last-declaration rule.

Running the pass twice prepends the policy twice; the output is not meant to
be fed back in.
"""

import logging

from bs4 import Tag

from docx2email.services.html_tree import prepend_style, style_value, walk
from docx2email.services.style_policy import styles_for

logger = logging.getLogger(__name__)


def inline_styles(root: Tag, font_family: str) -> Tag:
    """
    Merge policy styles into every element of ``root``. Mutates in place and
    returns the tree; callers should use the return value.
    """
    touched = 0

    def _visit(el: Tag) -> None:
        nonlocal touched
        declarations = styles_for(el.name, font_family, style_value(el, "text-align"))
        if declarations:
            prepend_style(el, declarations)
            touched += 1

    walk(root, _visit)
    logger.debug("inline_styles: styled %d elements", touched)
    return root
