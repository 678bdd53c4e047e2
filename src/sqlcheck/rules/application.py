"""Application development anti-patterns.

Rules:
- readable_passwords: Passwords stored or compared in plain text
"""

from sqlcheck.core.base import Category, Risk, TextPatternRule
from sqlcheck.core.registry import register


@register
class ReadablePasswordsRule(TextPatternRule):
    """Password columns declared as strings, or compared against literals."""

    rule_id = "application.readable_passwords"
    title = "Readable Passwords"
    category = Category.APPLICATION
    risk = Risk.ERROR
    pattern = (
        r"(password varchar)|(password text)|(password =)"
        r"|(pwd varchar)|(pwd text)|(pwd =)"
    )
    message = (
        "Do not store readable passwords:\n"
        "It's not secure to store a password in clear text or even to pass it over the\n"
        "network in the clear. If an attacker can read the SQL statement that you use\n"
        "to insert a password, they can plainly see the password.\n"
        "Additionally, interpolating the user's input string into the SQL query in\n"
        "plain text exposes it to discovery by an attacker.\n"
        "If you can read passwords, so can a hacker.\n"
        "The solution is to encode the password using a one-way cryptographic hash\n"
        "function. This function transforms the input string into a new string,\n"
        "called the hash, that is unrecognizable.\n"
        "Use a salt to defeat dictionary attacks. Don't put the plain-text password\n"
        "into the SQL query. Instead, compute the hash with the salt in your\n"
        "application code, and use only the hash in the SQL query.\n"
    )


__all__ = ["ReadablePasswordsRule"]
