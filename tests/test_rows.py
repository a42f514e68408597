import qr_card_maker.rows


IngestOptions = qr_card_maker.rows.IngestOptions


#============================================
def test_url_validation() -> None:
	"""
	Only http and https URLs pass unless other schemes are allowed.
	"""
	is_valid_url = qr_card_maker.rows.is_valid_url
	assert is_valid_url("https://example.com/a")
	assert is_valid_url("http://example.com")
	assert not is_valid_url("example.com/a")
	assert not is_valid_url("ftp://example.com/file")
	assert is_valid_url("ftp://example.com/file", allow_non_http=True)
	assert is_valid_url("mailto:someone@example.com", allow_non_http=True)
	assert not is_valid_url("https://")


#============================================
def test_derive_id() -> None:
	"""
	IDs come from the last path segment or a regex group.
	"""
	derive_id = qr_card_maker.rows.derive_id
	assert derive_id("https://example.com/items/abc123/", "lastPathSegment") == "abc123"
	assert derive_id("https://example.com", "lastPathSegment") == ""
	assert derive_id("https://example.com/p?id=XY9", "regex", r"id=(\w+)") == "XY9"
	assert derive_id("https://example.com/p", "regex", r"id=(\w+)") == ""
	assert derive_id("https://example.com/p", "regex", r"(") == ""


#============================================
def test_parse_url_lines() -> None:
	"""
	One row per non-blank line, numbered from 1, invalid URLs flagged.
	"""
	text = "https://example.com/a\n\n  not a url  \nhttps://example.com/b/c\n"
	rows = qr_card_maker.rows.parse_url_lines(text)
	assert [row.index for row in rows] == [1, 2, 3]
	assert rows[1].payload == "not a url"
	assert rows[1].errors
	assert not rows[0].errors
	assert [row.index for row in qr_card_maker.rows.valid_rows(rows)] == [1, 3]

	derived = qr_card_maker.rows.parse_url_lines(text, IngestOptions(derive_enabled=True))
	assert derived[2].label == "c"

	templated = qr_card_maker.rows.parse_url_lines(text, IngestOptions(label_template="Card {index}"))
	assert [row.label for row in templated] == ["Card 1", "Card 2", "Card 3"]


#============================================
def test_parse_csv_text() -> None:
	"""
	CSV rows pick payload and label columns and fill templates.
	"""
	text = (
		"url,label,sku\n"
		"https://example.com/w,Widget,A1\n"
		"\n"
		",Missing,B2\n"
		"https://example.com/items/g7,,C3\n"
	)
	rows = qr_card_maker.rows.parse_csv_text(text, "url", "label")
	assert [row.index for row in rows] == [1, 2, 3]
	assert rows[0].label == "Widget"
	assert rows[0].raw_data["sku"] == "A1"
	assert rows[1].errors == ("Missing payload column: url",)
	assert rows[2].label == ""

	options = IngestOptions(derive_enabled=True, label_template="{label} ({col:sku})")
	rows = qr_card_maker.rows.parse_csv_text(text, "url", "label", options)
	assert rows[0].label == "Widget (A1)"
	assert rows[2].label == "g7 (C3)"

	assert qr_card_maker.rows.parse_csv_text("   ", "url") == []
	assert qr_card_maker.rows.read_csv_headers(text) == ["url", "label", "sku"]


#============================================
def test_render_label_template() -> None:
	"""
	Placeholders are replaced; unknown columns become empty.
	"""
	row = qr_card_maker.rows.DataRow(
		payload="https://example.com/x",
		label="Name",
		index=4,
		raw_data={"city": "Oslo"},
	)
	result = qr_card_maker.rows.render_label_template("{index}|{id}|{short}|{label}|{col:city}|{col:zip}", row, "x")
	assert result == "4|x|x|Name|Oslo|"
