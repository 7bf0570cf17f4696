import re
from typing import Any

from bs4 import BeautifulSoup


def sanitize_html(html_text: str) -> str:
    """
    Removes all HTML tags from a string, returning only the clean text.
    HTML entities (&#8211;, &amp;, ...) are decoded on the way.
    """
    if not html_text: return ""
    soup = BeautifulSoup(html_text, "lxml")
    text = soup.get_text(separator=' ', strip=True)
    text = re.sub(r'\s\s+', ' ', text)
    return text


def rendered_text(field: Any) -> str:
    """Plain text of a WordPress REST field, which is either a string or {'rendered': ...}."""
    if isinstance(field, dict):
        field = field.get('rendered') or ''
    if not isinstance(field, str):
        return ''
    return sanitize_html(field)
