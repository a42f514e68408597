"""
Batch PDF export: one page per valid row, assembled in row order.
"""

# Standard Library
import io
import json
import pathlib
import typing

# PIP3 modules
import pypdf

# local repo modules
import qr_card_maker as qcm
import qr_card_maker.assets
import qr_card_maker.config
import qr_card_maker.document
import qr_card_maker.render
import qr_card_maker.rows


ExportResult = qcm.config.ExportResult
DocumentModel = qcm.document.DocumentModel
DataRow = qcm.rows.DataRow
AssetBundle = qcm.assets.AssetBundle

ProgressFn = typing.Callable[[int, int], None]


class NothingToExportError(ValueError):
	"""
	Raised when no row is valid for export.
	"""


#============================================
def export_pdf(
	doc: DocumentModel,
	rows: list[DataRow],
	assets: AssetBundle,
	progress: ProgressFn | None = None,
) -> ExportResult:
	"""
	Render every valid row and merge the pages into one PDF.

	Rows with errors are skipped. A row whose page fails to render is
	reported and left out; the rest of the batch continues.

	Args:
		doc: Document snapshot.
		rows: Data rows in order.
		assets: Decoded images.
		progress: Called with (current, total) after each valid row.

	Returns:
		ExportResult with the PDF bytes.

	Raises:
		NothingToExportError: When no row is valid, or every valid row
			failed to render.
	"""
	valid = qcm.rows.valid_rows(rows)
	skipped = [row.index for row in rows if not row.is_valid]
	if not valid:
		raise NothingToExportError("Nothing to export: no valid rows")

	writer = pypdf.PdfWriter()
	exported: list[int] = []
	failed: list[int] = []
	total = len(valid)
	for current, row in enumerate(valid, start=1):
		try:
			page_bytes = qcm.render.render_page_pdf(doc, row, assets)
		except (ValueError, OSError) as error:
			print(f"Warning: row {row.index} failed to render: {error}")
			failed.append(row.index)
		else:
			reader = pypdf.PdfReader(io.BytesIO(page_bytes))
			writer.add_page(reader.pages[0])
			exported.append(row.index)
		if progress is not None:
			progress(current, total)

	if not exported:
		raise NothingToExportError(f"Nothing to export: all {total} valid rows failed to render")
	buffer = io.BytesIO()
	writer.write(buffer)
	return ExportResult(
		pdf_bytes=buffer.getvalue(),
		pages=len(exported),
		total_rows=len(rows),
		exported_rows=exported,
		skipped_rows=skipped,
		failed_rows=failed,
	)


#============================================
def write_pdf(result: ExportResult, output_path: pathlib.Path) -> None:
	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_bytes(result.pdf_bytes)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[pathlib.Path],
	result: ExportResult,
	doc: DocumentModel,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input data and asset files.
		result: Export result.
		doc: Document used for the export.
	"""
	page = doc.page
	data = {
		"inputs": [str(path) for path in inputs],
		"pages": result.pages,
		"total_rows": result.total_rows,
		"exported_rows": result.exported_rows,
		"skipped_rows": result.skipped_rows,
		"failed_rows": result.failed_rows,
		"page": {
			"preset_id": page.preset_id,
			"width_pts": page.width_pts,
			"height_pts": page.height_pts,
			"width": qcm.config.to_display_unit(page.width_pts, page.unit_preference),
			"height": qcm.config.to_display_unit(page.height_pts, page.unit_preference),
			"unit": page.unit_preference,
		},
		"document": qcm.document.document_to_dict(doc),
	}
	with pathlib.Path(manifest_path).open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
