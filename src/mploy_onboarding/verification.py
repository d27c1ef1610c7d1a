"""
Employer Verification Helpers.

Employers can verify by email when their login email sits on the same
domain as the company website; everyone else uploads documents.
"""

import re

FREE_EMAIL_PROVIDERS = {"gmail.com", "yahoo.com", "hotmail.com", "outlook.com"}


def email_domain(email: str) -> str | None:
    """Lowercased part after '@', or None for malformed input."""
    if not email or email.count("@") != 1:
        return None
    domain = email.split("@")[1].strip().lower()
    return domain or None


def website_domain(website: str) -> str | None:
    """Host part of a website URL without scheme, path or leading 'www.'."""
    if not website or not website.strip():
        return None
    host = re.sub(r"^https?://", "", website.strip(), flags=re.IGNORECASE)
    host = host.split("/")[0].split(":")[0].lower()
    if host.startswith("www."):
        host = host[4:]
    return host or None


def is_business_email(email: str) -> bool:
    """True unless the email is on a free consumer provider."""
    domain = email_domain(email)
    return domain is not None and domain not in FREE_EMAIL_PROVIDERS


def can_verify_by_email(email: str, website: str) -> bool:
    """Login email and company website share a domain."""
    e_domain = email_domain(email)
    w_domain = website_domain(website)
    return e_domain is not None and e_domain == w_domain


def verify_email_domain(email_domain_value: str | None, website: str | None) -> bool:
    """
    Check a declared company email domain against the website.

    Subdomains of the website (e.g. mail.acme.com for acme.com) count.
    """
    if not email_domain_value or not website:
        return False
    declared = email_domain_value.strip().lower().lstrip("@")
    w_domain = website_domain(website)
    if not w_domain:
        return False
    return declared == w_domain or declared.endswith(f".{w_domain}")
