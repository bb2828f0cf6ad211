# assignmentpro/config/security.py
# Upload limits and allowed file types

import os


class SecurityConfig:
    """Security configuration for uploaded files"""

    FILE_UPLOAD = {
        'max_file_size': int(os.getenv('MAX_FILE_SIZE', 10 * 1024 * 1024)),  # 10MB
        'max_screenshot_size': int(os.getenv('MAX_SCREENSHOT_SIZE', 5 * 1024 * 1024)),  # 5MB
        'max_files_per_upload': int(os.getenv('MAX_FILES_PER_UPLOAD', 10)),
        'allowed_extensions': {
            # Documents
            '.pdf', '.doc', '.docx', '.txt', '.rtf', '.odt',
            # Images
            '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp',
            # Spreadsheets
            '.xls', '.xlsx', '.csv', '.ods',
            # Presentations
            '.ppt', '.pptx', '.odp',
            # Archives
            '.zip', '.rar', '.7z',
        },
        'image_extensions': {'.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp'},
    }

    STORAGE = {
        'upload_dir': os.getenv('UPLOAD_DIR', 'uploads'),
        'public_prefix': '/uploads',
    }

    @classmethod
    def is_extension_allowed(cls, extension: str) -> bool:
        """Check if file extension is allowed"""
        return extension.lower() in cls.FILE_UPLOAD['allowed_extensions']

    @classmethod
    def is_image_extension(cls, extension: str) -> bool:
        return extension.lower() in cls.FILE_UPLOAD['image_extensions']
