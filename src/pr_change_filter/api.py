"""
Filter HTTP API

Flask application exposing pattern validation and pull request
evaluation, so a configuration form or a CI host can call the filter
over HTTP.
"""

import io
import json
import logging
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from . import __version__
from .config import AppConfig
from .filtering.errors import RegexSyntaxError
from .filtering.policy import FilterConfiguration
from .filtering.validation import validate_patterns
from .models.pull_request import PatternRequest, EvaluationRequest


logger = logging.getLogger(__name__)


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _failed(message, status_code: int, **extra):
    body = {'error': message, 'status': 'failed'}
    body.update(extra)
    return jsonify(body), status_code


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Application configuration (environment by default)

    Returns:
        Configured Flask app
    """
    config = config or AppConfig.from_env()

    app = Flask(__name__)
    app.config['PR_FILTER'] = config
    CORS(app)  # Enable CORS for configuration forms

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'pr-change-filter',
            'version': __version__
        })

    @app.route('/api/v1/filters/validate', methods=['POST'])
    def validate_filter():
        """Validate inclusion and exclusion patterns."""
        try:
            data = PatternRequest(**_json_body())
        except ValidationError as e:
            return _failed('Invalid request', 422, details=json.loads(e.json()))

        results = validate_patterns(data.inclusion_pattern, data.exclusion_pattern)
        return jsonify({
            'valid': not any(r.is_error for r in results),
            'results': [r.to_dict() for r in results],
        })

    @app.route('/api/v1/filters/evaluate', methods=['POST'])
    def evaluate_filter():
        """Decide whether a pull request is excluded."""
        try:
            data = EvaluationRequest(**_json_body())
        except ValidationError as e:
            return _failed('Invalid request', 422, details=json.loads(e.json()))

        try:
            configuration = FilterConfiguration.build(data.inclusion_pattern, data.exclusion_pattern)
        except RegexSyntaxError as e:
            return _failed(str(e), 400, field=e.field)

        output = io.StringIO()
        decision = configuration.evaluate(data.pr_number, data.changed_files(), output)
        logger.info(f"Evaluated PR #{data.pr_number}: excluded={decision.excluded}")

        return jsonify({
            'pr_number': decision.pr_number,
            'excluded': decision.excluded,
            'matched_path': decision.matched_path,
            'matched_previous': decision.matched_previous,
            'log': output.getvalue(),
        })

    return app
