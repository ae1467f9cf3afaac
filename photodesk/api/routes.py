import logging
from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import ClientDisconnected, HTTPException, RequestEntityTooLarge

from photodesk.errors import PhotoDeskError, ValidationError
from photodesk.services import auth_service, photo_service, upload_service
from photodesk.services.upload_service import UPLOAD_ERR_PARTIAL

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

# PUT and PATCH are accepted so they reach the unknown-action error
ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ALLOWED_METHODS = "GET, POST, DELETE, OPTIONS"
ALLOWED_HEADERS = f"Content-Type, {auth_service.AUTH_HEADER}"


def _config():
    return current_app.config["PHOTODESK"]


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


# --- CORS ---

@api_bp.after_app_request
def add_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = _config().cors_origin
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response


# --- Errors ---

@api_bp.app_errorhandler(PhotoDeskError)
def handle_photodesk_error(error):
    return jsonify(error.to_dict()), error.status_code


@api_bp.app_errorhandler(RequestEntityTooLarge)
def handle_too_large(error):
    return jsonify({"error": "file too large"}), 400


@api_bp.app_errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({"error": error.description}), error.code


# --- Actions ---

def list_photos():
    return jsonify({"photos": photo_service.read_all(_config())})


def upload_photo():
    try:
        file = request.files.get("photo")
        title = request.form.get("title", "")
        tag = request.form.get("tag", "")
    except ClientDisconnected:
        raise ValidationError(f"upload error: {UPLOAD_ERR_PARTIAL}")
    photo = upload_service.handle_upload(_config(), file, title=title, tag=tag)
    return jsonify({"success": True, "photo": photo})


def delete_photo():
    photo_service.delete_photo(_config(), _json_body().get("id", ""))
    return jsonify({"success": True})


def reorder_photos():
    photo_service.reorder_photos(_config(), _json_body().get("ids", []))
    return jsonify({"success": True})


PUBLIC_ROUTES = {
    ("GET", "list"): list_photos,
}

PROTECTED_ROUTES = {
    ("POST", "upload"): upload_photo,
    ("DELETE", "delete"): delete_photo,
    ("POST", "reorder"): reorder_photos,
}


@api_bp.route("/", methods=ROUTE_METHODS)
@api_bp.route("/upload.php", methods=ROUTE_METHODS)
def dispatch():
    if request.method == "OPTIONS":
        return "", 200

    key = (request.method, request.args.get("action", ""))
    if key in PUBLIC_ROUTES:
        return PUBLIC_ROUTES[key]()

    # Everything else requires auth
    auth_service.require_auth(request, _config())

    if key in PROTECTED_ROUTES:
        return PROTECTED_ROUTES[key]()
    raise ValidationError("unknown action")


@api_bp.route("/<path:path>", methods=["OPTIONS"])
def preflight(path):
    return "", 200
