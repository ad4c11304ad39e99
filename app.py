from flask import Flask, current_app, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv
import logging
import os

from reconcile.layout import REGION_LAYOUTS
from reconcile.records import MalformedRecord, parse_records

from sync.errors import StoreUnavailable
from sync.google_sheets_adapter import GoogleSheetsAdapter
from sync.local_spreadsheet_service import LocalSpreadsheetStore
from sync.sync_service import apply_fulfillment_updates, read_region_rows


logger = logging.getLogger(__name__)

TEXT = {"Content-Type": "text/plain; charset=utf-8"}


# -------------------------------------------------
# Store selection
# -------------------------------------------------

def build_store(environ=None):
    """
    LOCAL_STORE_DIR -> CSV files on disk (development)
    otherwise       -> Google Sheets (SPREADSHEET_ID + service account)
    """
    environ = os.environ if environ is None else environ

    local_dir = environ.get("LOCAL_STORE_DIR")
    if local_dir:
        logger.info("Using local spreadsheet store at %s", local_dir)
        return LocalSpreadsheetStore(local_dir)

    return GoogleSheetsAdapter(environ.get("SPREADSHEET_ID", ""))


# -------------------------------------------------
# App
# -------------------------------------------------

def get_store():
    return current_app.extensions["grid_store"]


def get_layout(region):
    return current_app.extensions["region_layouts"].get(region)


def create_app(store, layouts=None):
    app = Flask(__name__)
    CORS(app)
    app.extensions["grid_store"] = store
    app.extensions["region_layouts"] = dict(REGION_LAYOUTS if layouts is None else layouts)

    @app.route("/")
    def index():
        return "Google Sheets as Database", 200, TEXT

    @app.route("/<region>-data", methods=["GET"])
    def get_region_data(region):
        layout = get_layout(region)
        if not layout:
            return "Unknown region.", 404, TEXT

        try:
            rows = read_region_rows(get_store(), layout)
        except StoreUnavailable as exc:
            logger.exception("%s: read failed", layout.sheet)
            return str(exc), 500, TEXT

        if not rows:
            return "No data found.", 404, TEXT
        return jsonify(rows), 200

    @app.route("/<region>-data", methods=["POST"])
    def update_region_data(region):
        layout = get_layout(region)
        if not layout:
            return "Unknown region.", 404, TEXT

        try:
            records = parse_records(request.get_json(silent=True))
        except MalformedRecord as exc:
            logger.warning("%s: rejected update: %s", layout.sheet, exc)
            return str(exc), 400, TEXT

        try:
            apply_fulfillment_updates(get_store(), layout, records)
        except StoreUnavailable as exc:
            logger.exception("%s: update failed", layout.sheet)
            return str(exc), 500, TEXT

        return "Data updated successfully.", 201, TEXT

    return app


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    app = create_app(build_store())
    port = int(os.getenv("PORT", "3000"))
    logger.info("Server is running on port %s", port)
    app.run(host="0.0.0.0", port=port)
