import os
import shutil
import time
from fastapi import UploadFile
from blog_backend.config import UPLOAD_DIR, UPLOAD_URL_PREFIX


def generate_file_name(original_name: str) -> str:
    """`photo.png` -> `photo-1718000000000.png`"""
    base, ext = os.path.splitext(os.path.basename(original_name or "upload"))
    return f"{base}-{int(time.time() * 1000)}{ext}"


def save_upload(upload: UploadFile) -> str:
    """Write the uploaded file into UPLOAD_DIR and return its server-relative path."""
    os.makedirs(UPLOAD_DIR, exist_ok=True)
    filename = generate_file_name(upload.filename)

    with open(os.path.join(UPLOAD_DIR, filename), "wb") as out:
        shutil.copyfileobj(upload.file, out)

    return f"{UPLOAD_URL_PREFIX}/{filename}"


def delete_upload(image_path: str):
    """Remove a file stored by save_upload, given the path it returned."""
    file_path = os.path.join(UPLOAD_DIR, os.path.basename(image_path))
    if os.path.exists(file_path):
        os.remove(file_path)
