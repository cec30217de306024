"""Constants for skill name checks."""

from __future__ import annotations

import re
from re import Pattern

KEBAB_CASE_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
