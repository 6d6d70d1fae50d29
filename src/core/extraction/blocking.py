"""Detección de páginas anti-bot (challenge/verificación).

Un proveedor bloqueado suele responder 200/403/503 con una página de
Cloudflare, un CAPTCHA o un "verify you are human". No intentamos resolverlos:
solo los reconocemos para no confundirlos con "sin resultados".
"""

from __future__ import annotations

from bs4 import BeautifulSoup

# (marcador en minúsculas, motivo legible)
BODY_MARKERS: tuple[tuple[str, str], ...] = (
    ("cf-browser-verification", "cloudflare browser verification"),
    ("cf-challenge", "cloudflare challenge"),
    ("challenge-platform", "cloudflare challenge"),
    ("cf-turnstile", "turnstile captcha"),
    ("g-recaptcha", "recaptcha"),
    ("www.google.com/recaptcha", "recaptcha"),
    ("h-captcha", "hcaptcha"),
    ("hcaptcha.com", "hcaptcha"),
    ("verify you are human", "human verification"),
    ("verifying you are human", "human verification"),
    ("checking your browser", "browser check"),
    ("enable javascript and cookies to continue", "browser check"),
    ("ddos-guard", "ddos-guard"),
)

CHALLENGE_TITLES: tuple[str, ...] = (
    "just a moment",
    "attention required",
    "access denied",
    "security check",
    "captcha",
    "are you a robot",
    "ddos-guard",
)


def _page_title(text: str) -> str | None:
    soup = BeautifulSoup(text, "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip().lower()
    return None


def detect_block(text: str | None) -> str | None:
    """Devuelve el motivo si `text` es una página de challenge, o `None`."""

    if not text:
        return None
    lowered = text.lower()
    for marker, reason in BODY_MARKERS:
        if marker in lowered:
            return reason

    if "<title" not in lowered:
        return None
    title = _page_title(text)
    if title:
        for needle in CHALLENGE_TITLES:
            if needle in title:
                return f"challenge page ({title})"
    return None
