#!/usr/bin/env python3
"""
Flask Web Application for the Puppet Profile Parser
Provides REST API endpoints for converting uploaded Puppet Server logs.
"""

from flask import Flask, Response, request, jsonify
from werkzeug.utils import secure_filename
import io
import os
import tempfile
from profile_parser import LogParser, __version__
from profile_parser.core.errors import UnsupportedFormatError
from profile_parser.formatters import FORMATS, get_formatter
from profile_parser.web import prepare_results

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'log', 'txt', 'gz'}

MIMETYPES = {
    'zipkin': 'application/json',
    'csv': 'text/csv',
    'flamegraph': 'text/plain',
    'human': 'text/plain',
}


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def parse_upload(file):
    """Save an uploaded log to a unique file in the upload folder, parse it and remove it."""
    # Keep the extension, ".gz" selects decompression
    suffix = os.path.splitext(secure_filename(file.filename))[1]
    with tempfile.NamedTemporaryFile(suffix=suffix, dir=app.config['UPLOAD_FOLDER'],
                                     delete=False) as tmp:
        file.save(tmp)
    filepath = tmp.name

    try:
        parser = LogParser()
        parser.parse_file(filepath)
    finally:
        os.remove(filepath)

    return parser


def validate_upload():
    """Return an error response tuple for a bad upload, or None."""
    if 'file' not in request.files:
        return jsonify({'error': 'No file provided'}), 400

    file = request.files['file']

    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    if not allowed_file(file.filename):
        return jsonify({'error': 'Invalid file type. Only .log, .txt and .gz files are allowed.'}), 400

    return None


@app.route('/api/version')
def version_api():
    """Report the parser version and supported formats."""
    return jsonify({'version': __version__, 'formats': FORMATS})


@app.route('/api/parse', methods=['POST'])
def parse_api():
    """
    API endpoint to convert a Puppet Server log.
    Accepts: multipart/form-data with fields:
      - 'file': Puppet Server log, optionally gzipped
      - 'format': 'zipkin'|'csv'|'flamegraph'|'human' (optional, default: 'zipkin')
    Returns: the rendered traces
    """
    error = validate_upload()
    if error:
        return error

    output_format = request.form.get('format', 'zipkin').lower()
    if output_format not in FORMATS:
        return jsonify({'error': str(UnsupportedFormatError(
            f"{output_format} is not a supported output format."))}), 400

    try:
        parser = parse_upload(request.files['file'])

        output = io.StringIO()
        get_formatter(output_format, output).write(parser.traces)

        return Response(output.getvalue(), mimetype=MIMETYPES[output_format])

    except Exception as e:
        return jsonify({'error': f"{type(e).__name__}: {e}"}), 500


@app.route('/api/summary', methods=['POST'])
def summary_api():
    """
    API endpoint to summarize a Puppet Server log.
    Accepts: multipart/form-data with a 'file' field
    Returns: JSON with per-trace totals and per-kind exclusive time tables
    """
    error = validate_upload()
    if error:
        return error

    try:
        parser = parse_upload(request.files['file'])
        return jsonify(prepare_results(parser))

    except Exception as e:
        return jsonify({'error': f"{type(e).__name__}: {e}"}), 500


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
