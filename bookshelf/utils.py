import re
import time

_book_id_pattern = re.compile(r"-?[0-9]+")


def now_millis() -> int:
    return int(time.time() * 1000)


def parse_book_id(value) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not isinstance(value, str) or not _book_id_pattern.fullmatch(value):
        return None
    return int(value)
