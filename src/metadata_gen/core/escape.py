"""
HTML escaping for generated meta tags.

escape_html replaces the five reserved characters in one pass.
unescape_html reverses exactly those entities plus numeric character
references, also in one pass, so ``unescape_html(escape_html(s)) == s``
holds for any string. Escaping is not idempotent: already escaped text
gets its ampersands escaped again.
"""

import html
import re

_NAMED = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}

# bounded digit runs keep overlong references literal
_ENTITY_RE = re.compile(r"&(?:(amp|lt|gt|quot|apos)|#(\d{1,8})|#[xX]([0-9A-Fa-f]{1,7}));")


def escape_html(value: str) -> str:
    """Escape ``& < > " '`` as ``&amp; &lt; &gt; &quot; &#x27;``."""
    return html.escape(value, quote=True)


def _decode_entity(match: "re.Match[str]") -> str:
    name, decimal, hexadecimal = match.groups()
    if name:
        return _NAMED[name]

    code_point = int(decimal) if decimal else int(hexadecimal, 16)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def unescape_html(value: str) -> str:
    """Decode the five reserved-character entities and numeric references.

    Other named entities and invalid references are left untouched.
    """
    return _ENTITY_RE.sub(_decode_entity, value)
