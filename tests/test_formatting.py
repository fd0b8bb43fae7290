from cinescope.core.formatting import format_currency, format_runtime, release_year


def test_format_runtime():
    assert format_runtime(136) == "2h 16m"
    assert format_runtime(45) == "0h 45m"


def test_format_runtime_unknown():
    assert format_runtime(None) is None
    assert format_runtime(0) is None


def test_format_currency():
    assert format_currency(185000000) == "$185,000,000.00"


def test_format_currency_unreported():
    assert format_currency(0) is None
    assert format_currency(None) is None


def test_release_year():
    assert release_year("2008-07-16") == "2008"
    assert release_year("") == "N/A"
    assert release_year(None) == "N/A"
