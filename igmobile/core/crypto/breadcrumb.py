"""Comment breadcrumb: typing telemetry attached to posted comments."""
import base64
import random
import time
from typing import Optional

from Crypto.Hash import HMAC, SHA256

BREADCRUMB_KEY = b'iN4$aGr0m'


def comment_breadcrumb(text: str, rng: Optional[random.Random] = None, now_ms: Optional[int] = None) -> str:
    """
    Build the user_breadcrumb value for a comment.

    Format: base64(HMAC-SHA256(data)) + '\\n' + base64(data) + '\\n', where
    data is '{length} {typing ms} {change events} {epoch ms}'.
    """
    rng = rng or random.Random()
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    length = len(text)
    typing_ms = length * rng.randint(250, 400) + rng.randint(0, 1000)
    changes = max(1, length // rng.randint(3, 5))
    data = f"{length} {typing_ms} {changes} {now_ms}".encode('ascii')

    mac = HMAC.new(BREADCRUMB_KEY, data, digestmod=SHA256)
    signed = base64.b64encode(mac.digest()).decode('ascii')
    body = base64.b64encode(data).decode('ascii')
    return f"{signed}\n{body}\n"
