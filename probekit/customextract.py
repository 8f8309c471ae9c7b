"""Preset regular expressions for custom extraction."""

from __future__ import annotations

import re

EXTRACT_PRESETS: dict[str, re.Pattern[str]] = {
    "url": re.compile(
        r"^(http(s)?:\/\/)[a-zA-Z0-9][-a-zA-Z0-9]{0,62}(\.[a-zA-Z0-9][-a-zA-Z0-9]{0,62})+"
        r"(:[0-9]{1,5})?[-a-zA-Z0-9()@:%_\\\+\.~#?&//=]*\Z",
        re.ASCII,
    ),
    "ipv4": re.compile(
        r"((2(5[0-5]|[0-4]\d))|[0-1]?\d{1,2})(\.((2(5[0-5]|[0-4]\d))|[0-1]?\d{1,2})){3}",
        re.ASCII,
    ),
    "mail": re.compile(
        r"^([A-Za-z0-9_\-\.\u4e00-\u9fa5])+\@([A-Za-z0-9_\-\.])+\.([A-Za-z]{2,8})\Z"
    ),
}