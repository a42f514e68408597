"""
CLI entry points for QR card generation.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.assets
import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.export
import qr_card_maker.render
import qr_card_maker.rows


DocumentModel = qcm.document.DocumentModel
IngestOptions = qcm.rows.IngestOptions

PREVIEW_SCALE = qcm.config.PREVIEW_SCALE


#============================================
def build_document(args: argparse.Namespace) -> DocumentModel:
	"""
	Build the document from an optional JSON file and CLI overrides.

	Args:
		args: Parsed argparse namespace.

	Returns:
		DocumentModel.
	"""
	if args.document_path:
		doc = qcm.document.load_document(pathlib.Path(args.document_path))
	else:
		doc = qcm.document.default_document()
	if args.preset:
		doc = qcm.document.apply_preset(doc, args.preset)
	if args.logo_path:
		doc = qcm.document.apply_update(doc, "code", {"logo": {"enabled": True}})
	if args.hide_overlays:
		doc = qcm.document.apply_update(doc, "overlays", {"show": False})
	return doc


#============================================
def build_ingest_options(args: argparse.Namespace) -> IngestOptions:
	return IngestOptions(
		allow_non_http=args.allow_non_http,
		derive_enabled=args.derive_method is not None,
		derive_method=args.derive_method or "lastPathSegment",
		derive_regex=args.derive_regex,
		label_template=args.label_template,
	)


#============================================
def read_rows(args: argparse.Namespace) -> list[qcm.rows.DataRow]:
	"""
	Read rows from a URL list or a CSV file.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Parsed rows, valid or not.
	"""
	input_path = pathlib.Path(args.input_path)
	text = input_path.read_text(encoding="utf-8")
	options = build_ingest_options(args)
	use_csv = args.csv if args.csv is not None else input_path.suffix.lower() == ".csv"
	if use_csv:
		return qcm.rows.parse_csv_text(text, args.payload_column, args.label_column, options)
	return qcm.rows.parse_url_lines(text, options)


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Render QR code cards from URLs or CSV rows to a print-ready PDF.")
	parser.add_argument("input_path", help="URL list (one per line) or CSV file.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-w", "--preview", dest="preview_path", default=None, help="Write a PNG preview of one row.")
	output_group.add_argument("-r", "--preview-row", dest="preview_row", type=int, default=1, help="Row index for the preview.")
	output_group.add_argument("-s", "--preview-scale", dest="preview_scale", type=float, default=PREVIEW_SCALE, help="Preview pixels per point.")
	output_group.add_argument("-S", "--save-document", dest="save_document_path", default=None, help="Save the effective document JSON.")

	design_group = parser.add_argument_group("Design")
	design_group.add_argument("-j", "--document", dest="document_path", default=None, help="Document JSON file.")
	design_group.add_argument("-p", "--preset", dest="preset", default=None, help="Page preset id.")
	design_group.add_argument("-b", "--background", dest="background_path", default=None, help="Background image.")
	design_group.add_argument("-l", "--logo", dest="logo_path", default=None, help="Logo image centered on the code.")
	design_group.add_argument("-H", "--hide-overlays", dest="hide_overlays", action="store_true", help="Hide bleed and safe guides in the preview.")

	data_group = parser.add_argument_group("Data")
	data_group.add_argument("-c", "--csv", dest="csv", action="store_true", help="Treat input as CSV.")
	data_group.add_argument("-u", "--urls", dest="csv", action="store_false", help="Treat input as a URL list.")
	data_group.add_argument("--payload-column", dest="payload_column", default="url", help="CSV column to encode.")
	data_group.add_argument("--label-column", dest="label_column", default="label", help="CSV column for the caption.")
	data_group.add_argument("-t", "--label-template", dest="label_template", default="{label}", help="Caption template.")
	data_group.add_argument("-a", "--allow-non-http", dest="allow_non_http", action="store_true", help="Accept non-http URL schemes.")
	data_group.add_argument(
		"-d",
		"--derive-id",
		dest="derive_method",
		choices=("lastPathSegment", "regex"),
		default=None,
		help="Derive an ID from each URL for captions.",
	)
	data_group.add_argument("--derive-regex", dest="derive_regex", default=None, help="Pattern whose first group is the ID.")

	parser.set_defaults(
		csv=None,
		allow_non_http=False,
		hide_overlays=False,
	)

	args = parser.parse_args()
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from rows to PDF.

	Args:
		args: Parsed argparse namespace.
	"""
	print("QR card pipeline")
	print(f"Input: {args.input_path}")
	print(f"Output PDF: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	if args.document_path:
		print(f"Document: {args.document_path}")
	if args.preset:
		print(f"Preset: {args.preset}")

	start_time = time.perf_counter()
	doc = build_document(args)
	print(f"Page: {doc.page.width_pts:.2f} x {doc.page.height_pts:.2f} pt ({doc.page.preset_id})")
	if args.save_document_path:
		qcm.document.save_document(doc, pathlib.Path(args.save_document_path))
		print(f"Document saved: {args.save_document_path}")

	rows = read_rows(args)
	valid = qcm.rows.valid_rows(rows)
	print(f"Rows read: {len(rows)}")
	print(f"Valid rows: {len(valid)}")
	for row in rows:
		for error in row.errors:
			print(f"Row {row.index}: {error}")

	background_path = pathlib.Path(args.background_path) if args.background_path else None
	logo_path = pathlib.Path(args.logo_path) if args.logo_path else None
	assets = qcm.assets.load_assets(background_path, logo_path)

	if args.preview_path:
		preview_row = None
		for row in rows:
			if row.index == args.preview_row:
				preview_row = row
		image = qcm.render.render_preview(doc, preview_row, assets, args.preview_scale)
		image.save(args.preview_path)
		print(f"Preview written: {args.preview_path}")

	render_start = time.perf_counter()
	print("Rendering pages")
	result = qcm.export.export_pdf(
		doc,
		rows,
		assets,
		progress=lambda current, total: qcm.render.print_progress("Pages", current, total),
	)
	print()
	render_end = time.perf_counter()

	output_path = pathlib.Path(args.output_path)
	qcm.export.write_pdf(result, output_path)
	print(f"Pages written: {result.pages}")
	print(f"Rows skipped: {len(result.skipped_rows)}")
	if result.failed_rows:
		print(f"Rows failed: {len(result.failed_rows)}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	inputs = [pathlib.Path(args.input_path)]
	for path in (args.document_path, args.background_path, args.logo_path):
		if path:
			inputs.append(pathlib.Path(path))
	qcm.export.write_manifest(pathlib.Path(manifest_path), inputs, result, doc)

	total_time = time.perf_counter() - start_time
	print(
		"Timing: render={:.2f}s total={:.2f}s".format(
			render_end - render_start,
			total_time,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	try:
		run_pipeline(args)
	except qcm.export.NothingToExportError as error:
		print()
		print(f"Error: {error}")
		raise SystemExit(1)
