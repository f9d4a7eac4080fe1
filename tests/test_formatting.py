from motocenter.utils import formatting


def test_format_price():
    assert formatting.format_price(12500) == "12.500 €"
    assert formatting.format_price(950) == "950 €"
    assert formatting.format_price(None) == formatting.PRICE_ON_REQUEST


def test_format_mileage():
    assert formatting.format_mileage(24000) == "24.000 km"
    assert formatting.format_mileage(0) == "0 km"
    assert formatting.format_mileage(1234.5) == "1.234,5 km"


def test_status_label():
    assert formatting.status_label("Sold") == formatting.SOLD
    assert formatting.status_label("sold") == formatting.SOLD
    assert formatting.status_label("Available") == formatting.AVAILABLE
    assert formatting.status_label("") == formatting.AVAILABLE
