"""
Input Validation Module
Boundary checks for text submitted to the API and CLI

The scoring engine itself accepts any string; these checks only protect the
service (size limits, null bytes, unsafe filenames from OCR uploads).
"""

import re
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

MAX_FILENAME_LENGTH = 255
MAX_SOURCE_LABEL_LENGTH = 64

SAFE_FILENAME_PATTERN = re.compile(r'^[\w\s\.\-\(\)]+$', re.UNICODE)
SAFE_LABEL_PATTERN = re.compile(r'^[\w\s\-\.:]+$', re.UNICODE)


def sanitize_text_input(content: Optional[str], max_length: int = 50000) -> Tuple[str, Optional[str]]:
    """
    Validate text submitted for analysis.

    Returns:
        Tuple of (content, error_message)
        If error_message is not None, the input should be rejected
    """
    if content is None or not content.strip():
        return "", "Please enter text or a URL to analyze"

    if len(content) > max_length:
        return "", f"Text exceeds maximum length of {max_length} characters"

    # Check for null bytes
    if '\x00' in content:
        logger.warning("Blocked null byte in submitted text")
        return "", "Invalid text content"

    return content, None


def sanitize_filename(filename: Optional[str]) -> Tuple[str, Optional[str]]:
    """
    Sanitize and validate a filename input.

    Returns:
        Tuple of (sanitized_filename, error_message)
    """
    if not filename:
        return "", "Filename cannot be empty"

    # Strip whitespace
    filename = filename.strip()

    # Check length
    if len(filename) > MAX_FILENAME_LENGTH:
        return "", f"Filename exceeds maximum length of {MAX_FILENAME_LENGTH} characters"

    # Check for path traversal
    if '..' in filename or filename.startswith('/') or filename.startswith('\\'):
        logger.warning(f"Blocked path traversal attempt: {filename}")
        return "", "Invalid filename"

    # Check for null bytes
    if '\x00' in filename:
        logger.warning("Blocked null byte injection attempt")
        return "", "Invalid filename"

    if not SAFE_FILENAME_PATTERN.match(filename):
        return "", "Filename contains invalid characters"

    return filename, None


def sanitize_source_label(label: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Validate an optional source label such as 'Email' or 'SMS'"""
    if label is None or not label.strip():
        return None, None

    label = ' '.join(label.split())
    if len(label) > MAX_SOURCE_LABEL_LENGTH:
        return None, f"Source label exceeds maximum length of {MAX_SOURCE_LABEL_LENGTH} characters"
    if not SAFE_LABEL_PATTERN.match(label):
        return None, "Source label contains invalid characters"
    return label, None


def log_security_event(event_type: str, details: str, ip_address: str = None):
    """
    Log security-related events for monitoring and alerting.
    """
    log_msg = f"SECURITY_EVENT: {event_type}"
    if ip_address:
        log_msg += f" | IP: {ip_address}"
    log_msg += f" | Details: {details}"
    logger.warning(log_msg)
