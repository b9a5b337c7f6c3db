import os

from flask import current_app
from werkzeug.utils import secure_filename


def allowed_file(filename):
    allowed = current_app.config['ALLOWED_MEDIA']
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def save_upload(file, subdir):
    """Store an uploaded file under UPLOAD_FOLDER/subdir and return its public path.

    Returns None for a missing or disallowed file.
    """
    if not file or not file.filename or not allowed_file(file.filename):
        return None
    filename = secure_filename(file.filename)
    upload_dir = os.path.join(current_app.config['UPLOAD_FOLDER'], subdir)
    os.makedirs(upload_dir, exist_ok=True)
    base, ext = os.path.splitext(filename); i = 1; unique = filename
    while os.path.exists(os.path.join(upload_dir, unique)):
        unique = f"{base}_{i}{ext}"; i += 1
    file.save(os.path.join(upload_dir, unique))
    return f'/uploads/{subdir}/{unique}'


def discard_upload(public_path):
    """Remove a file saved by save_upload, e.g. when the request using it failed."""
    if not public_path or not public_path.startswith('/uploads/'):
        return
    path = os.path.join(current_app.config['UPLOAD_FOLDER'], public_path[len('/uploads/'):])
    if os.path.isfile(path):
        os.remove(path)
