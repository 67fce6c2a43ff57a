"""Identifier and credential shape checks.

Pure logic -- no I/O.  These checks are the only thing standing between
remote-supplied strings and the URLs and file paths built from them, so
they accept nothing but plain ASCII alphanumerics.

Usage:
    from vacuum_table.schema.identifiers import is_airtable_id

    >>> is_airtable_id("fldpjJ6SlAbLkrapJ")
    True
    >>> is_airtable_id("../../etc/passwd")
    False
"""

import string

AIRTABLE_ID_LENGTH = 17

_ALPHANUMERIC = frozenset(string.ascii_letters + string.digits)
_LOWER_HEX = frozenset(string.digits + "abcdef")

# Personal access tokens: "pat" + 14 alphanumerics, ".", 64 hex characters.
_PAT_PREFIX = "pat"
_PAT_ID_LENGTH = 17
_PAT_SECRET_LENGTH = 64


def is_airtable_id(name: str) -> bool:
    """Return True if *name* is a 17-character ASCII alphanumeric identifier."""
    if len(name) != AIRTABLE_ID_LENGTH:
        return False
    return all(c in _ALPHANUMERIC for c in name)


def is_valid_token(token: str) -> bool:
    """Return True if *token* looks like an API key or personal access token.

    Accepts the legacy ``key...`` API keys (which share the identifier shape)
    and ``patXXXXXXXXXXXXXX.<64 hex>`` personal access tokens.
    """
    if token.startswith("key"):
        return is_airtable_id(token)
    if token.startswith(_PAT_PREFIX):
        token_id, sep, secret = token.partition(".")
        return (
            sep == "."
            and len(token_id) == _PAT_ID_LENGTH
            and all(c in _ALPHANUMERIC for c in token_id)
            and len(secret) == _PAT_SECRET_LENGTH
            and all(c in _LOWER_HEX for c in secret)
        )
    return False
