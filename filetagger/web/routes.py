"""HTTP routes for filetagger.

Listing pages render HTML by default and JSON when the client prefers
``application/json``. Mutating and matching endpoints take and return JSON
of the form ``{"success": bool, ...}``.
"""

import logging
from typing import Any, Dict, List

from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    redirect,
    render_template,
    request,
    url_for,
)

from filetagger.matching import normalize_tags, parse_tags
from filetagger.models import ErrorKind, OperationResult
from filetagger.operations import CSV_FILENAME
from filetagger.orchestration import TagService

logger = logging.getLogger(__name__)

SERVICE_KEY = "FILETAGGER_SERVICE"

# HTTP status for each failure category
STATUS_BY_ERROR_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.FILESYSTEM: 500,
}

bp = Blueprint("files", __name__)


def _service() -> TagService:
    return current_app.config[SERVICE_KEY]


def _wants_json() -> bool:
    best = request.accept_mimetypes.best_match(["text/html", "application/json"])
    return best == "application/json"


def _json_body() -> Dict[str, Any]:
    """Request body as a dict; malformed or non-object bodies become {}."""
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _coerce_tags(raw: Any) -> List[str]:
    if isinstance(raw, str):
        return parse_tags(raw)
    if isinstance(raw, list):
        return normalize_tags(tag for tag in raw if isinstance(tag, str))
    return []


def _failure(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def _operation_response(result: OperationResult):
    if result.success:
        return jsonify({"success": True, "message": result.message})
    return _failure(result.message, STATUS_BY_ERROR_KIND[result.error_kind])


@bp.route("/", methods=["GET"])
def index():
    return redirect(url_for("files.root_files"))


@bp.route("/root", methods=["GET"])
def root_files():
    service = _service()
    files = service.list_root_files()
    if _wants_json():
        return jsonify({
            "rootFolder": str(service.root),
            "files": [record.to_dict() for record in files],
        })
    return render_template(
        "root.html", title="Files in Root Folder", root_folder=service.root, files=files
    )


@bp.route("/all", methods=["GET"])
def all_files():
    service = _service()
    files = service.list_all_files()
    if _wants_json():
        return jsonify({
            "rootFolder": str(service.root),
            "files": [record.to_dict() for record in files],
        })
    return render_template(
        "all.html",
        title="All Files (Including Subfolders)",
        root_folder=service.root,
        files=files,
    )


@bp.route("/folders", methods=["GET"])
def folders():
    service = _service()
    records = service.list_folders()
    if _wants_json():
        return jsonify({
            "rootFolder": str(service.root),
            "folders": [record.to_dict() for record in records],
        })
    return render_template(
        "folders.html", title="Folders and Subfolders", root_folder=service.root, folders=records
    )


@bp.route("/download", methods=["GET"])
def download():
    try:
        csv_data = _service().export_csv()
    except OSError as e:
        logger.error(f"Error generating CSV: {e}")
        return Response(f"Error generating CSV: {e}", status=500, mimetype="text/plain")

    return Response(
        csv_data,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )


@bp.route("/rename-file", methods=["POST"])
def rename_file():
    payload = _json_body()
    old_name = payload.get("oldFileName")
    new_name = payload.get("newFileName")

    if not isinstance(old_name, str) or not isinstance(new_name, str) \
            or not old_name.strip() or not new_name.strip():
        return _failure("Old and new file names are required.", 400)

    return _operation_response(_service().rename_file(old_name, new_name))


@bp.route("/match-folders", methods=["POST"])
def match_folders():
    payload = _json_body()
    tags = _coerce_tags(payload.get("tags"))

    if not tags:
        return _failure("Tags are required.", 400)

    result = _service().match_folders(tags)
    if not result.success:
        return _failure(result.message, STATUS_BY_ERROR_KIND[result.error_kind])

    if not result.matches:
        return jsonify({"success": False, "folders": []})

    return jsonify({"success": True, "folders": result.folders})


@bp.route("/suggest-tags", methods=["POST"])
def suggest_tags():
    payload = _json_body()
    file_name = payload.get("fileName")

    if not isinstance(file_name, str) or not file_name.strip():
        return _failure("File name is required.", 400)

    tags = _service().suggest_tags(file_name)
    return jsonify({"success": bool(tags), "tags": tags})


@bp.route("/move-file", methods=["POST"])
def move_file():
    payload = _json_body()
    file_name = payload.get("fileName")
    destination = payload.get("destination")

    if not isinstance(file_name, str) or not isinstance(destination, str) \
            or not file_name.strip() or not destination.strip():
        return _failure("File name and destination folder are required.", 400)

    return _operation_response(_service().move_file(file_name, destination))
