from __future__ import annotations

from typing import TYPE_CHECKING, Final
from xml.sax.saxutils import escape as _xml_escape

if TYPE_CHECKING:
    from .config import Credentials

GATEWAY_URL: Final[str] = "http://www.toplusmsyolla.com/smsgonder1Npost.php"
MESSAGE_TYPE: Final[str] = "Normal"
FORM_FIELD: Final[str] = "data"

SMS_TEMPLATE: Final[str] = (
    "<sms>\n"
    "  <kno>{kno}</kno>\n"
    "  <kulad>{kulad}</kulad>\n"
    "  <sifre>{sifre}</sifre>\n"
    "  <gonderen>{gonderen}</gonderen>\n"
    "  <mesaj>{mesaj}</mesaj>\n"
    "  <numaralar>{numaralar}</numaralar>\n"
    "  <tur>{tur}</tur>\n"
    "</sms>"
)

# saxutils.escape covers & < > by default; quotes are added explicitly.
_QUOTE_ENTITIES: Final[dict[str, str]] = {'"': "&quot;", "'": "&apos;"}


def escape_xml(value: str) -> str:
    return _xml_escape(value, _QUOTE_ENTITIES)


def well_formed(value: str) -> str:
    """Replace lone surrogates with U+FFFD so the value always encodes as UTF-8."""
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def build_sms_xml(credentials: Credentials, phone: str, message: str, escape: bool = True) -> str:
    """
    Render the gateway's <sms> document.

    With escape=False every value is interpolated verbatim, so a message
    containing `<` or `&` produces a malformed document. That is how the
    gateway was historically fed and is kept available for compatibility.
    Lone surrogates are always replaced with U+FFFD.
    """
    def quote(value: str) -> str:
        value = well_formed(value)
        return escape_xml(value) if escape else value

    return SMS_TEMPLATE.format(
        kno=quote(credentials.user_no),
        kulad=quote(credentials.username),
        sifre=quote(credentials.password),
        gonderen=quote(credentials.originator),
        mesaj=quote(message),
        numaralar=quote(phone),
        tur=MESSAGE_TYPE,
    )


def build_form(xml: str) -> dict[str, str]:
    return {FORM_FIELD: xml}
