"""
Форматирование дайджеста объявлений для Telegram (HTML)
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from html import escape
from typing import Callable, List, Optional, Sequence

from models.listing import Listing

DEFAULT_EMOJI = "🏠"

PROPERTY_EMOJI = {
    "Διαμέρισμα": "🏢",
    "Μονοκατοικία": "🏡",
    "Μεζονέτα": "🏘️",
    "Γραφείο": "🏢",
    "Κατάστημα": "🏪",
    "Γκαρσονιέρα": "🏠",
    "οικία": "🏡",
    "Βίλα": "🏠",
}

# Сколько строк показывать в каждом разделе
NEW_DISPLAY_LIMIT = 10
DROPS_DISPLAY_LIMIT = 8
UPS_DISPLAY_LIMIT = 5


def property_emoji(property_type: Optional[str]) -> str:
    return PROPERTY_EMOJI.get(property_type or "", DEFAULT_EMOJI)


def format_price(value: Optional[float]) -> str:
    """Цена в греческом формате: 110000.4 -> 110.000€"""
    if value is None:
        return "N/A"
    # Округление половины вверх, как Math.round
    rounded = math.floor(value + 0.5)
    return f"{rounded:,}".replace(",", ".") + "€"


def format_percent(change: float, base: float) -> str:
    """Процент изменения с одним знаком; '?' если базовая цена не положительна"""
    if base <= 0:
        return "?"
    ratio = Decimal(change) / Decimal(base) * 100
    return str(ratio.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _text(value: Optional[str]) -> str:
    return escape(value or "", quote=False)


def format_new_line(listing: Listing) -> str:
    emoji = property_emoji(listing.property_type)
    sqm = f" {_number(listing.square_meters)}τμ" if listing.square_meters else ""
    return (
        f"• {emoji} {_text(listing.property_type)}{sqm} — "
        f"{format_price(listing.price)} — {_text(listing.area)}"
    )


def format_drop_line(listing: Listing) -> str:
    emoji = property_emoji(listing.property_type)
    old_price = listing.previous_price
    pct = format_percent(abs(listing.price_change or 0), old_price)
    return (
        f"• {emoji} {_text(listing.property_type)} {_text(listing.area)}: "
        f"{format_price(old_price)} → {format_price(listing.price)} (-{pct}%)"
    )


def format_up_line(listing: Listing) -> str:
    emoji = property_emoji(listing.property_type)
    old_price = listing.previous_price
    pct = format_percent(listing.price_change or 0, old_price)
    return (
        f"• {emoji} {_text(listing.property_type)} {_text(listing.area)}: "
        f"{format_price(old_price)} → {format_price(listing.price)} (+{pct}%)"
    )


def format_section(
    heading: str,
    listings: Sequence[Listing],
    display_limit: int,
    line_formatter: Callable[[Listing], str],
) -> str:
    """Заголовок раздела, первые display_limit строк и строка '...και N ακόμη'"""
    lines = [line_formatter(listing) for listing in listings[:display_limit]]
    text = f"{heading}\n" + "\n".join(lines)
    if len(listings) > display_limit:
        text += f"\n  ...και {len(listings) - display_limit} ακόμη"
    return text + "\n\n"


def build_digest(
    hours: int,
    new_listings: List[Listing],
    price_drops: List[Listing],
    price_ups: List[Listing],
    app_url: str = "",
) -> Optional[str]:
    """
    Сборка текста дайджеста

    Returns:
        HTML-текст сообщения или None, если во всех разделах пусто
    """
    if not new_listings and not price_drops and not price_ups:
        return None

    message = "🏠 <b>Greecing Real Estate — Ενημέρωση</b>\n"
    message += f"📅 Τελευταίες {hours} ώρες\n\n"

    if new_listings:
        message += format_section(
            f"📢 <b>{len(new_listings)} νέες αγγελίες:</b>",
            new_listings, NEW_DISPLAY_LIMIT, format_new_line,
        )
    if price_drops:
        message += format_section(
            f"📉 <b>{len(price_drops)} μειώσεις τιμών:</b>",
            price_drops, DROPS_DISPLAY_LIMIT, format_drop_line,
        )
    if price_ups:
        message += format_section(
            f"📈 <b>{len(price_ups)} αυξήσεις τιμών:</b>",
            price_ups, UPS_DISPLAY_LIMIT, format_up_line,
        )

    if app_url:
        message += f'🔗 <a href="{escape(app_url, quote=True)}">Άνοιξε την εφαρμογή</a>'

    return message
