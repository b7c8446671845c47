from countries import clean_country_name, normalize_country, same_country


def test_normalize_country_collapses_known_spellings() -> None:
    assert normalize_country("UK") == "UNITED KINGDOM"
    assert normalize_country("U.K.") == "UNITED KINGDOM"
    assert normalize_country(" great   britain ") == "UNITED KINGDOM"
    assert normalize_country("u.s.a.") == "UNITED STATES"
    assert normalize_country("United States of America") == "UNITED STATES"
    assert normalize_country("Dubai") == "UAE"
    assert normalize_country("AU") == "AUSTRALIA"
    assert normalize_country("nz") == "NEW ZEALAND"


def test_normalize_country_strips_list_serialised_leftovers() -> None:
    assert clean_country_name('["Australia"]') == "Australia"
    assert normalize_country("['Canada']") == "CANADA"


def test_normalize_country_passes_unknown_values_through() -> None:
    assert normalize_country("Narnia") == "NARNIA"
    assert normalize_country("narnia ") == normalize_country(" NARNIA")


def test_normalize_country_empty_input() -> None:
    assert normalize_country(None) == ""
    assert normalize_country("   ") == ""
    assert normalize_country("[]") == ""


def test_same_country() -> None:
    assert same_country("AU", "australia")
    assert same_country("United Kingdom", "U.K")
    assert not same_country("UK", "USA")
    assert same_country(None, "")
    assert same_country("UK", "United Kingdom") and same_country("United Kingdom", "uk")
