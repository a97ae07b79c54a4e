from flask import jsonify, render_template, request
from sqlalchemy.orm.exc import StaleDataError
from werkzeug.exceptions import HTTPException
from servible.domain.invariants.exceptions import IllegalTransition, InvariantViolation, SiteNotFound


def _is_public_request():
    return request.blueprint == "public"


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(IllegalTransition)
    def handle_illegal_transition(error):
        response = jsonify({
            "error": "IllegalTransition",
            "message": str(error)
        })
        response.status_code = 409
        return response

    @app.errorhandler(StaleDataError)
    def handle_stale_data(error):
        app.logger.info("Concurrent modification rejected: %s", error)
        response = jsonify({
            "error": "Conflict",
            "message": "Conflict detected. Resource has been modified."
        })
        response.status_code = 409
        return response

    @app.errorhandler(SiteNotFound)
    def handle_site_not_found(error):
        if _is_public_request():
            return render_template("site/not_found.html"), 404
        response = jsonify({"error": "NotFound", "message": "Site not found"})
        response.status_code = 404
        return response

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if _is_public_request():
            if error.code == 404:
                return render_template("site/not_found.html"), 404
            return error
        if request.blueprint is None or not request.blueprint.startswith("v1"):
            return error
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
