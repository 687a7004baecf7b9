from parsing import format_iso_duration, is_ingredient_header, parse_iso_duration, parse_servings


def test_iso_duration_to_minutes():
    assert parse_iso_duration("PT1H30M") == 90
    assert parse_iso_duration("PT45M") == 45
    assert parse_iso_duration("PT2H") == 120
    assert parse_iso_duration("pt20m") == 20


def test_iso_duration_rounds_seconds_half_up():
    assert parse_iso_duration("PT45S") == 1
    assert parse_iso_duration("PT30S") == 1
    assert parse_iso_duration("PT29S") is None
    assert parse_iso_duration("PT1M90S") == 3


def test_iso_duration_missing_or_unparseable_is_none():
    assert parse_iso_duration(None) is None
    assert parse_iso_duration("") is None
    assert parse_iso_duration("garbage") is None
    assert parse_iso_duration(30) is None


def test_zero_duration_means_no_duration():
    assert parse_iso_duration("PT0S") is None
    assert parse_iso_duration("PT0H0M") is None
    assert parse_iso_duration("PT") is None


def test_format_iso_duration():
    assert format_iso_duration("PT1H") == "1 hour"
    assert format_iso_duration("PT2H30M") == "2 hours 30 minutes"
    assert format_iso_duration("PT1M") == "1 minute"
    assert format_iso_duration("PT1H1M") == "1 hour 1 minute"


def test_format_iso_duration_fallbacks():
    assert format_iso_duration("") == ""
    assert format_iso_duration(None) == ""
    assert format_iso_duration("not-iso") == "not-iso"
    # Seconds are not rendered, so the input comes back unchanged
    assert format_iso_duration("PT45S") == "PT45S"


def test_parse_servings():
    assert parse_servings("Serves 4 people") == (4, "Serves 4 people")
    assert parse_servings("12 cookies") == (12, "12 cookies")
    assert parse_servings("a few") == (None, "a few")
    assert parse_servings(None) == (None, "")


def test_parse_servings_truncates_text_only():
    text = "Makes about enough for a party of 24 ok"
    text = text + "!" * (40 - len(text))
    assert len(text) == 40

    servings, servings_text = parse_servings(text)

    assert servings == 24
    assert servings_text == text[:32]
    assert len(servings_text) == 32


def test_ingredient_headers():
    assert is_ingredient_header("For the sauce:")
    assert is_ingredient_header("  for the DOUGH:  ")
    assert is_ingredient_header("Marinade:")
    assert is_ingredient_header("Dressing: lemon and oil")
    assert is_ingredient_header("Topping:")


def test_regular_ingredients():
    assert not is_ingredient_header("2 cups flour")
    assert not is_ingredient_header("Salt to taste")
    assert not is_ingredient_header("Sauce tomatoes, 500 g")
    assert not is_ingredient_header("")
    assert not is_ingredient_header(None)
