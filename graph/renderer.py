"""Render Mermaid source into a standalone HTML page."""

import html
from typing import Optional

from graph.html_template import (
    D3_SCRIPT_URL,
    MERMAID_SCRIPT_URL,
    PAGE_TEMPLATE,
    ZOOM_HEAD,
    ZOOM_SCRIPT,
)


def build_page_title(repository_name: Optional[str] = None) -> str:
    if repository_name:
        return f"Pull Request Graph ( {repository_name} )"
    return "Pull Request Graph"


def build_index_html(
    mermaid_code: str,
    repository_name: Optional[str] = None,
    zoom: bool = True,
) -> str:
    """
    Embed Mermaid source in a complete HTML document.

    The diagram text is HTML-escaped: the browser decodes it back before
    Mermaid reads the element's text, while titles cannot inject markup.

    Args:
        mermaid_code: Output of build_mermaid_code()
        repository_name: Shown in <title> and <h1> when given
        zoom: Load D3 and make the rendered SVG zoomable/pannable

    Returns:
        The HTML document as a string
    """
    return PAGE_TEMPLATE.format(
        title=html.escape(build_page_title(repository_name)),
        mermaid_url=MERMAID_SCRIPT_URL,
        extra_head=ZOOM_HEAD.format(d3_url=D3_SCRIPT_URL) if zoom else "",
        mermaid_code=html.escape(mermaid_code.rstrip("\n"), quote=False),
        extra_script=ZOOM_SCRIPT if zoom else "",
    )
