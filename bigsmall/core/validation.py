import re

def is_valid_issue(s: str) -> bool:
    return bool(re.fullmatch(r"[0-9A-Za-z_-]{1,64}", s or ""))

def is_valid_digit(d: int) -> bool:
    return isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 9
