"""
Row ingestion: URL lists and CSV text become DataRow records.
"""

# Standard Library
import csv
import dataclasses
import io
import re
import urllib.parse


@dataclasses.dataclass(frozen=True)
class DataRow:
	payload: str
	label: str
	index: int
	errors: tuple[str, ...] = ()
	raw_data: dict = dataclasses.field(default_factory=dict)

	@property
	def is_valid(self) -> bool:
		return not self.errors


@dataclasses.dataclass(frozen=True)
class IngestOptions:
	allow_non_http: bool = False
	derive_enabled: bool = False
	derive_method: str = "lastPathSegment"
	derive_regex: str | None = None
	label_template: str = "{label}"


DERIVE_METHODS = ("lastPathSegment", "regex")
COLUMN_PATTERN = re.compile(r"\{col:([^}]+)\}")


#============================================
def is_valid_url(value: str, allow_non_http: bool = False) -> bool:
	"""
	Check that a payload parses as an absolute URL.

	Args:
		value: Candidate URL.
		allow_non_http: Accept any scheme instead of only http and https.

	Returns:
		True when the URL is acceptable.
	"""
	try:
		parts = urllib.parse.urlsplit(value)
	except ValueError:
		return False
	if not parts.scheme:
		return False
	if allow_non_http:
		return True
	return parts.scheme in ("http", "https") and bool(parts.netloc)


#============================================
def derive_id(url: str, method: str, regex: str | None = None) -> str:
	"""
	Derive a short identifier from a URL.

	Args:
		url: Source URL.
		method: lastPathSegment or regex.
		regex: Pattern whose first group is the identifier.

	Returns:
		Identifier, or an empty string when nothing matches.
	"""
	if method == "lastPathSegment":
		try:
			path = urllib.parse.urlsplit(url).path
		except ValueError:
			return ""
		segments = [segment for segment in path.split("/") if segment]
		if not segments:
			return ""
		return segments[-1]
	if method == "regex" and regex:
		try:
			match = re.search(regex, url)
		except re.error:
			print(f"Warning: invalid ID pattern: {regex}")
			return ""
		if match is None or match.lastindex is None:
			return ""
		return match.group(1) or ""
	if method not in DERIVE_METHODS:
		raise ValueError(f"Unknown ID derivation method: {method}")
	return ""


#============================================
def render_label_template(template: str, row: DataRow, derived_id: str) -> str:
	"""
	Fill a caption template from a row.

	Supported placeholders: {index}, {id}, {short}, {label} and
	{col:Header} for CSV column values.

	Args:
		template: Template text.
		row: Row providing index, label and raw column data.
		derived_id: Identifier derived from the payload.

	Returns:
		Caption text.
	"""
	result = template.replace("{index}", str(row.index))
	result = result.replace("{id}", derived_id)
	result = result.replace("{short}", derived_id)
	result = result.replace("{label}", row.label)
	return COLUMN_PATTERN.sub(lambda match: str(row.raw_data.get(match.group(1)) or ""), result)


#============================================
def parse_url_lines(text: str, options: IngestOptions | None = None) -> list[DataRow]:
	"""
	Build rows from newline-separated URLs, one row per non-blank line.

	Args:
		text: URL list text.
		options: Ingestion options.

	Returns:
		Rows numbered from 1.
	"""
	if options is None:
		options = IngestOptions()
	lines = [line.strip() for line in text.splitlines()]
	lines = [line for line in lines if line]
	rows: list[DataRow] = []
	for index, url in enumerate(lines, start=1):
		errors: list[str] = []
		if not is_valid_url(url, options.allow_non_http):
			errors.append(f"Invalid URL: {url}")
		derived = ""
		if options.derive_enabled:
			derived = derive_id(url, options.derive_method, options.derive_regex)
		label = derived
		if not label and options.label_template:
			blank = DataRow(payload=url, label="", index=index)
			label = render_label_template(options.label_template, blank, derived)
		rows.append(DataRow(payload=url, label=label, index=index, errors=tuple(errors)))
	return rows


#============================================
def read_csv_headers(text: str) -> list[str]:
	if not text.strip():
		return []
	reader = csv.DictReader(io.StringIO(text))
	return list(reader.fieldnames or [])


#============================================
def parse_csv_text(
	text: str,
	payload_column: str,
	label_column: str | None = None,
	options: IngestOptions | None = None,
) -> list[DataRow]:
	"""
	Build rows from CSV text with a header line.

	Args:
		text: CSV text.
		payload_column: Column holding the encoded payload.
		label_column: Column holding the caption, if any.
		options: Ingestion options.

	Returns:
		Rows numbered from 1, blank lines skipped.
	"""
	if options is None:
		options = IngestOptions()
	if not text.strip():
		return []
	reader = csv.DictReader(io.StringIO(text))
	rows: list[DataRow] = []
	index = 0
	for record in reader:
		if not any((value or "").strip() for value in record.values() if isinstance(value, str)):
			continue
		index += 1
		raw = {key: value for key, value in record.items() if key is not None}
		errors: list[str] = []
		payload = (raw.get(payload_column) or "").strip()
		if not payload:
			errors.append(f"Missing payload column: {payload_column}")
		elif not is_valid_url(payload, options.allow_non_http):
			errors.append(f"Invalid URL: {payload}")

		label = ""
		if label_column:
			label = raw.get(label_column) or ""
		derived = ""
		if options.derive_enabled and payload:
			derived = derive_id(payload, options.derive_method, options.derive_regex)
			if not label:
				label = derived

		if options.label_template and options.label_template != "{label}":
			partial = DataRow(payload=payload, label=label, index=index, raw_data=raw)
			label = render_label_template(options.label_template, partial, derived)
		rows.append(DataRow(payload=payload, label=label, index=index, errors=tuple(errors), raw_data=raw))
	return rows


def valid_rows(rows: list[DataRow]) -> list[DataRow]:
	return [row for row in rows if row.is_valid]
