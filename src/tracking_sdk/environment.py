"""User-agent classification used to tag page views."""

from __future__ import annotations

import re
from typing import Optional, Pattern, Sequence, Tuple

from .models import Browser, OperatingSystem

# First match wins; order matters (e.g. Chrome user agents also mention Safari).
_OS_PATTERNS: Sequence[Tuple[Pattern[str], OperatingSystem]] = (
    (re.compile(r"Macintosh|MacIntel|MacPPC|Mac68K"), OperatingSystem.MAC_OS),
    (re.compile(r"iPhone|iPad|iPod"), OperatingSystem.IOS),
    (re.compile(r"Win32|Win64|Windows|WinCE"), OperatingSystem.WINDOWS),
    (re.compile(r"Android"), OperatingSystem.ANDROID),
    (re.compile(r"Linux"), OperatingSystem.LINUX),
)

_BROWSER_PATTERNS: Sequence[Tuple[Pattern[str], Browser]] = (
    (re.compile(r"Firefox"), Browser.FIREFOX),
    (re.compile(r"SamsungBrowser"), Browser.SAMSUNG_INTERNET),
    (re.compile(r"Opera|OPR"), Browser.OPERA),
    (re.compile(r"Trident"), Browser.INTERNET_EXPLORER),
    (re.compile(r"Edge"), Browser.EDGE),
    (re.compile(r"Chrome"), Browser.CHROME),
    (re.compile(r"Safari"), Browser.SAFARI),
)


def detect_operating_system(user_agent: Optional[str]) -> OperatingSystem:
    if user_agent:
        for pattern, label in _OS_PATTERNS:
            if pattern.search(user_agent):
                return label
    return OperatingSystem.UNKNOWN


def detect_browser(user_agent: Optional[str]) -> Browser:
    if user_agent:
        for pattern, label in _BROWSER_PATTERNS:
            if pattern.search(user_agent):
                return label
    return Browser.UNKNOWN
