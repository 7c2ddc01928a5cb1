from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from ..core.constants import DEFAULT_COUNTRY_CODE
from ..core.exceptions import MissingPhoneError

_NON_DIGITS = re.compile(r"\D")
# Characters left unescaped in the prefilled text.
_TEXT_SAFE = "!~*'()"


def normalize_phone(phone: Optional[str], *, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Digits only; a local ``0`` prefix becomes the country code."""
    digits = _NON_DIGITS.sub("", phone or "")
    if digits.startswith("0"):
        digits = country_code + digits[1:]
    return digits


@dataclass(frozen=True)
class ComposedMessage:
    phone: str
    text: str
    url: str


class WhatsAppComposer:
    base_url = "https://wa.me"

    def __init__(self, *, country_code: str = DEFAULT_COUNTRY_CODE):
        self._country_code = country_code

    def compose(self, phone: Optional[str], text: str) -> ComposedMessage:
        digits = normalize_phone(phone, country_code=self._country_code)
        if not digits:
            raise MissingPhoneError("No HP Wali Kelas tidak tersedia.")
        url = f"{self.base_url}/{digits}?text={quote(text, safe=_TEXT_SAFE)}"
        return ComposedMessage(phone=digits, text=text, url=url)
