"""Greek-locale labels used by the catalog pages."""

from __future__ import annotations

PRICE_ON_REQUEST = "Κατόπιν επικοινωνίας"
SOLD = "Πωλήθηκε"
AVAILABLE = "Διαθέσιμο"


def group_thousands(value: float) -> str:
    """Format like ``toLocaleString('el-GR')``: dot thousands, comma decimals."""
    rounded = round(value, 2)
    if rounded == int(rounded):
        return f"{int(rounded):,}".replace(",", ".")
    whole, frac = f"{rounded:,.2f}".split(".")
    return f"{whole.replace(',', '.')},{frac.rstrip('0')}"


def format_price(price: float | None) -> str:
    if not price:
        return PRICE_ON_REQUEST
    return f"{group_thousands(price)} €"


def format_mileage(mileage: float | None) -> str:
    if not mileage:
        return "0 km"
    return f"{group_thousands(mileage)} km"


def status_label(status: str | None) -> str:
    return SOLD if (status or "").lower() == "sold" else AVAILABLE
