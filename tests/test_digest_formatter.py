from models.listing import Listing
from services.digest_formatter import (
    build_digest,
    format_drop_line,
    format_new_line,
    format_percent,
    format_price,
    format_up_line,
    property_emoji,
)


def listing(listing_id="1", **fields):
    values = {"property_type": "Διαμέρισμα", "area": "Γλυφάδα", "price": 100000, "square_meters": 85}
    values.update(fields)
    return Listing(listing_id=listing_id, **values)


def test_price_uses_greek_grouping_and_rounds_half_up():
    assert format_price(110000) == "110.000€"
    assert format_price(1234567.5) == "1.234.568€"
    assert format_price(950) == "950€"
    assert format_price(None) == "N/A"


def test_percent_has_one_decimal_and_guards_against_zero_base():
    assert format_percent(10000, 110000) == "9.1"
    assert format_percent(5000, 100000) == "5.0"
    assert format_percent(5000, 0) == "?"
    assert format_percent(5000, -100) == "?"


def test_unknown_property_type_gets_default_emoji():
    assert property_emoji("Διαμέρισμα") == "🏢"
    assert property_emoji("Οικόπεδο") == "🏠"
    assert property_emoji(None) == "🏠"


def test_new_listing_line():
    assert format_new_line(listing()) == "• 🏢 Διαμέρισμα 85τμ — 100.000€ — Γλυφάδα"
    assert format_new_line(listing(square_meters=None)) == "• 🏢 Διαμέρισμα — 100.000€ — Γλυφάδα"


def test_price_drop_line_shows_previous_price_and_percent():
    line = format_drop_line(listing(price=100000, price_change=-10000))
    assert line == "• 🏢 Διαμέρισμα Γλυφάδα: 110.000€ → 100.000€ (-9.1%)"


def test_price_up_line_with_unknown_previous_price():
    line = format_up_line(listing(property_type="Βίλα", price=50000, price_change=50000))
    assert line == "• 🏠 Βίλα Γλυφάδα: 0€ → 50.000€ (+?%)"


def test_user_text_is_escaped():
    line = format_new_line(listing(area="Α<b>&Β"))
    assert "Α&lt;b&gt;&amp;Β" in line


def test_empty_digest_is_not_built():
    assert build_digest(6, [], [], []) is None


def test_digest_truncates_long_sections():
    new = [listing(str(i)) for i in range(25)]
    drops = [listing(f"d{i}", price=90000, price_change=-10000) for i in range(9)]

    message = build_digest(6, new, drops, [])

    assert message.startswith("🏠 <b>Greecing Real Estate — Ενημέρωση</b>\n📅 Τελευταίες 6 ώρες\n\n")
    assert "📢 <b>25 νέες αγγελίες:</b>" in message
    assert message.count("85τμ") == 10
    assert "  ...και 15 ακόμη" in message
    assert "📉 <b>9 μειώσεις τιμών:</b>" in message
    assert "  ...και 1 ακόμη" in message
    assert "αυξήσεις" not in message
    assert "<a href" not in message


def test_digest_sections_and_app_link():
    ups = [listing("u1", price=105000, price_change=5000)]

    message = build_digest(12, [], [], ups, app_url="https://app.example.com")

    assert "📅 Τελευταίες 12 ώρες" in message
    assert "📈 <b>1 αυξήσεις τιμών:</b>\n• 🏢 Διαμέρισμα Γλυφάδα: 100.000€ → 105.000€ (+5.0%)" in message
    assert message.endswith('🔗 <a href="https://app.example.com">Άνοιξε την εφαρμογή</a>')
