"""Site metadata endpoint: title, pages, nav and social links for page chrome."""

from flask import Blueprint, current_app, jsonify

bp = Blueprint("site", __name__)


@bp.route("/api/site")
def site_config():
    return jsonify(current_app.config["SITE"].as_dict())


@bp.route("/api/site/pages/<name>")
def site_page(name):
    """Title and description for one section page (blog, search, ...)."""
    page = current_app.config["SITE"].page(name)
    if page is None:
        return jsonify({"error": f"Unknown page: {name}"}), 404
    return jsonify({"TITLE": page.title, "DESCRIPTION": page.description})
