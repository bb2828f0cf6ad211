# assignmentpro/services/file_storage.py
import re
import time
import uuid
import mimetypes
from pathlib import Path
from typing import List, Optional
from fastapi import UploadFile
import logging

from assignmentpro.config.security import SecurityConfig
from assignmentpro.utils.exceptions import ValidationFailed, Fatal

logger = logging.getLogger(__name__)

# Public sub-folders under the upload root
PAYMENTS = "payments"
ATTACHMENTS = "assignments"
AI_DETECTION = "ai-detection"

class FileStorageService:
    """Stores uploaded bytes on disk and hands back the URI clients are served"""

    def __init__(
        self,
        upload_dir: str = SecurityConfig.STORAGE['upload_dir'],
        max_file_size: int = SecurityConfig.FILE_UPLOAD['max_file_size'],
        max_screenshot_size: int = SecurityConfig.FILE_UPLOAD['max_screenshot_size'],
        public_prefix: str = SecurityConfig.STORAGE['public_prefix'],
    ):
        self.upload_dir = Path(upload_dir)
        self.max_file_size = max_file_size
        self.max_screenshot_size = max_screenshot_size
        self.public_prefix = public_prefix.rstrip("/")

        # Create upload directory if it doesn't exist
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        for category in (PAYMENTS, ATTACHMENTS, AI_DETECTION):
            (self.upload_dir / category).mkdir(exist_ok=True)

    def sanitize_filename(self, filename: str) -> str:
        name = Path(filename).name
        name = re.sub(r"[^A-Za-z0-9._-]", "_", name)
        return name.lstrip(".") or "file"

    def generate_filename(self, suggested_name: str, prefix: str = "") -> str:
        """Timestamp + random fragment + name; same-named uploads never share a key"""
        timestamp = int(time.time() * 1000)
        unique_id = uuid.uuid4().hex[:8]
        return f"{prefix}{timestamp}-{unique_id}-{self.sanitize_filename(suggested_name)}"

    def validate(self, filename: Optional[str], size: int, images_only: bool = False) -> None:
        """
        Validate an upload's name and size

        Args:
            filename: Client supplied filename
            size: Size in bytes
            images_only: Screenshots must be images

        Raises:
            ValidationFailed: when the file is not acceptable
        """
        if not filename:
            raise ValidationFailed("File must have a filename")

        file_ext = Path(filename).suffix.lower()
        limit = self.max_screenshot_size if images_only else self.max_file_size

        if size > limit:
            raise ValidationFailed(f"File size exceeds maximum allowed size of {limit / (1024*1024):.1f}MB")

        if images_only:
            mime_type, _ = mimetypes.guess_type(filename)
            if not SecurityConfig.is_image_extension(file_ext) or not (mime_type or "").startswith("image/"):
                raise ValidationFailed("Screenshot must be an image file")
        elif not SecurityConfig.is_extension_allowed(file_ext):
            raise ValidationFailed(f"File type '{file_ext}' is not allowed")

    def store(self, content: bytes, suggested_name: str, category: str, prefix: str = "") -> str:
        """
        Write bytes to durable storage

        Returns:
            Public URI, e.g. /uploads/ai-detection/ai-detection-1700000000000-3f9a1c2e-scan.png
        """
        filename = self.generate_filename(suggested_name, prefix)
        target_dir = self.upload_dir / category
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            with open(target_dir / filename, "wb") as buffer:
                buffer.write(content)
        except OSError:
            logger.exception(f"Error saving file {filename}")
            raise Fatal("Failed to store uploaded file")

        logger.info(f"File saved successfully: {target_dir / filename}")
        return f"{self.public_prefix}/{category}/{filename}"

    def save_uploads(self, files: List[UploadFile], category: str) -> List[str]:
        """Store a batch of attachments, skipping empty parts. All or nothing."""
        max_files = SecurityConfig.FILE_UPLOAD['max_files_per_upload']
        files = [f for f in files if f is not None and f.filename]
        if len(files) > max_files:
            raise ValidationFailed(f"At most {max_files} files can be uploaded at once")

        uris: List[str] = []
        try:
            for file in files:
                content = file.file.read()
                if not content:
                    continue
                self.validate(file.filename, len(content))
                uris.append(self.store(content, file.filename, category))
        except Exception:
            self.delete_files(uris)
            raise
        return uris

    def path_for(self, uri: str) -> Path:
        relative = uri[len(self.public_prefix):].lstrip("/")
        return self.upload_dir / relative

    def delete_file(self, uri: str) -> bool:
        """
        Delete a stored file by its public URI

        Returns:
            True if file was deleted successfully, False otherwise
        """
        try:
            path = self.path_for(uri)
            if path.exists():
                path.unlink()
                logger.info(f"File deleted successfully: {path}")
                return True
            logger.warning(f"File not found for deletion: {path}")
            return False
        except OSError as e:
            logger.error(f"Error deleting file {uri}: {str(e)}")
            return False

    def delete_files(self, uris: List[str]) -> None:
        for uri in uris:
            self.delete_file(uri)

# Global instance
file_storage = FileStorageService()
