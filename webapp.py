"""
apacheconf Web Interface
Flask-based HTTP API for parsing httpd.conf files.
Run with: python webapp.py
Open: http://localhost:5000/api/health
"""

import os
import sys
import tempfile
from flask import Flask, request, jsonify, Response

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from apacheconf.emitter import ConfigEmitter
from apacheconf.errors import ParseError
from apacheconf.flattener import Flattener
from apacheconf.input_handler import InputHandler
from apacheconf.parser_engine import ParserEngine
from apacheconf.report_generator import ReportGenerator

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024  # 10MB max upload


class MissingInput(Exception):
    """Request carried neither an uploaded file nor a content field."""


@app.route('/api/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


@app.route('/api/parse', methods=['POST'])
def parse_config():
    """Parse an uploaded config file (or posted text) into JSON."""
    try:
        parsed = load_request_config()
    except MissingInput as e:
        return jsonify({"error": str(e)}), 400
    except ParseError as e:
        return jsonify({"error": e.to_dict()}), 422
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    result = {
        "filename": parsed.source.filename,
        "file_hash": parsed.source.file_hash[:16] + "...",
        "summary": ReportGenerator().summarize(parsed.document),
        "entries": parsed.document.as_list(),
    }

    if request.args.get('view') == 'flat':
        flat = Flattener().flatten(parsed.document)
        result["flat"] = {
            "sections": flat.sections,
            "flat_keys": flat.flat_keys,
            "blocks": flat.blocks,
        }

    return jsonify(result)


@app.route('/api/render', methods=['POST'])
def render_config():
    """Re-emit an uploaded config file as canonical httpd.conf text."""
    try:
        parsed = load_request_config()
    except MissingInput as e:
        return jsonify({"error": str(e)}), 400
    except ParseError as e:
        return jsonify({"error": e.to_dict()}), 422
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return Response(ConfigEmitter().emit(parsed.document), mimetype='text/plain')


def load_request_config():
    """Read the request's config text and run it through the parser."""
    if 'config_file' in request.files:
        file = request.files['config_file']
        if file.filename == '':
            raise MissingInput("No file selected")
        filename = file.filename
        content = file.read().decode('utf-8', errors='replace')
    elif 'content' in request.form:
        filename = 'httpd.conf'
        content = request.form['content']
    else:
        raise MissingInput("No file uploaded")

    # Save uploaded content temporarily so it goes through the usual loader
    with tempfile.NamedTemporaryFile(mode='w', suffix='.conf', delete=False,
                                     encoding='utf-8', newline='') as tmp:
        tmp.write(content)
        tmp_path = tmp.name

    try:
        config_input = InputHandler().load_file(tmp_path)
        config_input.filename = filename
        return ParserEngine().parse(config_input)
    finally:
        # Cleanup temp file
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)


if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("  apacheconf Web Interface")
    print("  POST http://localhost:5000/api/parse")
    print("=" * 60 + "\n")
    app.run(debug=True, host='0.0.0.0', port=5000)
