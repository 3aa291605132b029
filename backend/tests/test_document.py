from dashboard import DEFAULT_APP_TITLE, default_document, is_normalized, normalize_document


def test_default_document_shape():
    doc = default_document()
    assert is_normalized(doc)
    assert doc["appTitle"] == DEFAULT_APP_TITLE
    assert doc["showTitle"] is True
    assert doc["enableSearchPreview"] is True
    assert doc["lockWidgets"] is False
    assert [w["type"] for w in doc["widgets"]] == ["clock", "weather", "stocks", "shortcuts"]


def test_default_document_is_a_fresh_copy():
    a = default_document()
    a["widgets"][0]["config"]["colSpan"] = 1
    assert default_document()["widgets"][0]["config"]["colSpan"] == 2


def test_missing_and_mistyped_fields_fall_back_to_defaults():
    doc = normalize_document({"appTitle": 42, "showTitle": "yes", "widgets": {"a": 1}, "lockWidgets": None})
    assert doc == default_document()


def test_non_dict_input_gives_defaults():
    assert normalize_document("hello") == default_document()
    assert normalize_document(None) == default_document()


def test_ints_are_not_accepted_as_bools():
    doc = normalize_document({"showTitle": 0, "enableSearchPreview": 1})
    assert doc["showTitle"] is True
    assert doc["enableSearchPreview"] is True


def test_merge_over_base_keeps_base_fields():
    base = normalize_document({"appTitle": "Home", "showTitle": False, "widgets": []})
    doc = normalize_document({"appTitle": "X"}, base)
    assert doc["appTitle"] == "X"
    assert doc["showTitle"] is False
    assert doc["widgets"] == []


def test_incomplete_base_is_filled_from_defaults():
    doc = normalize_document({}, {"appTitle": "Home"})
    assert doc["appTitle"] == "Home"
    assert doc["lockWidgets"] is False
    assert len(doc["widgets"]) == 4


def test_unknown_top_level_keys_are_dropped():
    doc = normalize_document({"appTitle": "X", "theme": "dark"})
    assert "theme" not in doc
    assert is_normalized(doc)


def test_widget_config_passes_through_unchanged():
    widgets = [{"id": "w", "type": "weather", "title": "W", "config": {"city": "Oslo", "lat": 59.9, "extra": [1, 2]}}]
    doc = normalize_document({"widgets": widgets})
    assert doc["widgets"] == widgets
    assert doc["widgets"] is not widgets


def test_empty_title_is_kept():
    assert normalize_document({"appTitle": ""})["appTitle"] == ""


def test_is_normalized_rejects_extra_or_missing_keys():
    doc = default_document()
    doc["extra"] = 1
    assert not is_normalized(doc)
    assert not is_normalized({"appTitle": "X"})
    assert not is_normalized([])
