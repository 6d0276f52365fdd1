"""
ChartScope - Web Application

JSON API over the chart analyzer: chart catalog queries and CSV uploads.
"""

import os
import time
import logging
from datetime import datetime
from typing import List, Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.utils import secure_filename

from chartscope.config import ChartScopeConfig, create_default_config
from chartscope.core.errors import ChartScopeError, InvalidRequestError
from chartscope.service import ChartAnalyzer, UploadedFile

logger = logging.getLogger(__name__)


def _allowed_file(filename: str, allowed_extensions: List[str]) -> bool:
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed_extensions


def create_app(config: Optional[ChartScopeConfig] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: ChartScope configuration (defaults from the environment)

    Returns:
        Configured Flask app
    """
    config = config or create_default_config()
    analyzer = ChartAnalyzer(config)
    web = config.web

    app = Flask(__name__)
    app.json.sort_keys = False
    app.config["UPLOAD_FOLDER"] = web.upload_dir
    app.config["MAX_CONTENT_LENGTH"] = web.max_file_size * web.max_files
    app.extensions["chartscope"] = analyzer
    CORS(app, origins=[web.client_url], supports_credentials=True)

    def save_upload(file) -> UploadedFile:
        """Store an uploaded file as <timestamp>_<safe name>."""
        os.makedirs(app.config["UPLOAD_FOLDER"], exist_ok=True)
        stored_name = f"{int(time.time() * 1000)}_{secure_filename(file.filename) or 'upload.csv'}"
        path = os.path.join(app.config["UPLOAD_FOLDER"], stored_name)
        file.save(path)

        size = os.path.getsize(path)
        if size > web.max_file_size:
            os.remove(path)
            raise InvalidRequestError(
                f"{file.filename} is too large ({size} bytes, limit {web.max_file_size})"
            )
        return UploadedFile(path=path, filename=file.filename, uploaded_as=stored_name, size=size)

    def check_csv_files(files) -> None:
        for file in files:
            if not file.filename or not _allowed_file(file.filename, web.allowed_extensions):
                raise InvalidRequestError("Only CSV files are allowed")

    # ------------------------------------------------------------------
    # Error handlers (always JSON)
    # ------------------------------------------------------------------

    @app.errorhandler(InvalidRequestError)
    def invalid_request(e):
        return jsonify({"success": False, "error": str(e)}), 400

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"success": False, "error": "Bad request", "message": str(e)}), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(413)
    def file_too_large(e):
        limit_mb = web.max_file_size // (1024 * 1024)
        return jsonify({
            "success": False,
            "error": f"Upload too large. Limit is {limit_mb}MB per file, {web.max_files} files.",
        }), 413

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Something went wrong!", "message": "Internal server error"}), 500

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    @app.route("/api/health")
    def health():
        return jsonify({
            "message": "ChartScope API is running",
            "timestamp": datetime.now().isoformat(),
        })

    @app.route("/api/charts/all")
    def all_charts():
        try:
            return jsonify(analyzer.all_charts().to_dict())
        except Exception as e:
            logger.error(f"Error fetching chart data: {e}")
            return jsonify({"success": False, "error": "Failed to fetch chart data", "message": str(e)}), 500

    @app.route("/api/charts/genre-analysis")
    def genre_analysis():
        try:
            return jsonify(analyzer.genre_analysis().to_dict())
        except (ChartScopeError, OSError) as e:
            logger.error(f"Genre analysis failed: {e}")
            return jsonify({
                "success": False,
                "error": "Failed to analyze genre distribution",
                "message": str(e),
            }), 500

    @app.route("/api/charts/cross-platform")
    def cross_platform():
        try:
            overlaps = analyzer.cross_platform()
        except (ChartScopeError, OSError) as e:
            logger.error(f"Cross-platform analysis failed: {e}")
            return jsonify({
                "success": False,
                "error": "Failed to analyze cross-platform data",
                "message": str(e),
            }), 500
        return jsonify({
            "success": True,
            "data": [o.to_dict() for o in overlaps],
            "totalArtists": len(overlaps),
        })

    @app.route("/api/charts/search")
    def search():
        result = analyzer.search(
            request.args.get("query", ""),
            platform=request.args.get("platform") or None,
            genre=request.args.get("genre") or None,
        )
        return jsonify(result.to_dict())

    @app.route("/api/upload/csv", methods=["POST"])
    def upload_csv():
        files = request.files.getlist("csvFiles")
        if not files:
            raise InvalidRequestError("No CSV files uploaded")
        if len(files) > web.max_files:
            raise InvalidRequestError(f"At most {web.max_files} files can be uploaded at once")
        check_csv_files(files)

        uploads = [save_upload(file) for file in files]
        results = analyzer.analyze_uploads(uploads)
        return jsonify({
            "success": True,
            "message": f"Processed {len(uploads)} file(s)",
            "results": results,
            "uploadTimestamp": datetime.now().isoformat(),
        })

    @app.route("/api/upload/validate", methods=["POST"])
    def validate_csv():
        file = request.files.get("csvFile")
        if file is None:
            raise InvalidRequestError("No CSV file provided for validation")
        check_csv_files([file])

        upload = save_upload(file)
        try:
            report = analyzer.validate_upload(upload.path)
        except ChartScopeError as e:
            logger.error(f"Validation of {upload.filename} failed: {e}")
            return jsonify({"success": False, "error": "Validation failed", "message": str(e)}), 500
        return jsonify({"success": True, "validation": report.to_dict()})

    return app
