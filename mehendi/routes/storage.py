import os

from flask import Blueprint, current_app, send_from_directory

storage_bp = Blueprint("storage", __name__, url_prefix="/storage/v1/object/public")


@storage_bp.route("/<bucket>/<path:key>")
def public_object(bucket, key):
    bucket_folder = os.path.join(current_app.config["UPLOAD_FOLDER"], bucket)
    return send_from_directory(bucket_folder, key)
