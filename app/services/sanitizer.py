"""Clean admin-entered rich text before it is stored and rendered unescaped."""

import re

from bs4 import BeautifulSoup, Comment, Tag

# Tags whose entire subtree should be removed (scripting / embedded content)
_REMOVE_TAGS = {
    "script",
    "style",
    "noscript",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
    "applet",
    "link",
    "meta",
    "base",
    "form",
    "template",
}

# HTML attributes that contain CSS or JavaScript and should be stripped
# from every element that survives the tree pruning step.
_JUNK_ATTRS = re.compile(r"^(style|on\w+|formaction|srcdoc)$", re.IGNORECASE)

# Attributes holding URLs that must not use a scripting scheme
_URL_ATTRS = {"href", "src", "action", "poster", "background"}
_SCRIPT_SCHEME_RE = re.compile(r"^\s*(javascript|vbscript|data)\s*:", re.IGNORECASE)


def _strip_attributes(tag: Tag) -> None:
    junk = [
        attr
        for attr, value in tag.attrs.items()
        if _JUNK_ATTRS.match(attr)
        or (attr.lower() in _URL_ATTRS and _SCRIPT_SCHEME_RE.match(str(value)))
    ]
    for attr in junk:
        del tag[attr]


def sanitize(html: str) -> BeautifulSoup:
    """Remove scripting elements from *html* and return the cleaned BeautifulSoup tree."""
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(_REMOVE_TAGS):
        tag.decompose()

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if isinstance(tag, Tag):
            _strip_attributes(tag)

    return soup


def clean_rich_text(text: str) -> str:
    """Return *text* with unsafe markup removed.

    Plain text (no ``<``) is returned unchanged so articles written without
    markup are stored exactly as typed.
    """
    if "<" not in text:
        return text

    soup = sanitize(text)
    body = soup.body
    if body is None:
        return ""
    return body.decode_contents().strip()
