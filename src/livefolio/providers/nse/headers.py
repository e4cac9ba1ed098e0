"""Browser-like request headers expected by the NSE site."""

from fake_useragent import UserAgent

# Only these session cookies are replayed; the site sets several others.
SESSION_COOKIE_NAMES = frozenset(
    {"nsit", "nseappid", "ak_bmsc", "AKA_A2", "bm_mi", "bm_sv"}
)

BASE_HEADERS: dict[str, str] = {
    "Authority": "www.nseindia.com",
    "Referer": "https://www.nseindia.com/",
    "Accept": "*/*",
    "Origin": "https://www.nseindia.com",
    "Sec-Fetch-Site": "same-origin",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Dest": "empty",
    "Sec-Ch-Ua": '" Not A;Brand";v="99", "Chromium";v="109", "Google Chrome";v="109"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
}

_user_agents = UserAgent()


def random_user_agent() -> str:
    """Pick a real-world browser user-agent string at random."""
    return _user_agents.random


def extract_session_cookies(set_cookie_headers: list[str]) -> dict[str, str]:
    """
    Pick the allow-listed name=value pairs out of Set-Cookie directives.

    Attributes after the first ';' (Path, Expires, ...) are ignored.
    """
    tokens: dict[str, str] = {}
    for directive in set_cookie_headers:
        pair = directive.split(";", 1)[0].strip()
        name, sep, value = pair.partition("=")
        if sep and name.strip() in SESSION_COOKIE_NAMES:
            tokens[name.strip()] = value.strip()
    return tokens
