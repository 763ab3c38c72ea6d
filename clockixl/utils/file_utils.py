"""File I/O utility functions for clockiXL."""
import os
import logging
import markdown
from datetime import date

logger = logging.getLogger(__name__)

def write_bytes(directory: str, filename: str, content: bytes) -> str:
    """Write binary content to a file, creating the directory if needed.

    Args:
        directory: Output directory
        filename: Output file name
        content: Bytes to write

    Returns:
        Path of the written file
    """
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, filename)
    with open(path, 'wb') as f:
        f.write(content)
    logger.info("Wrote %d bytes to %s", len(content), path)
    return path

def write_markdown(md_path: str, content: str, start_date: date, end_date: date, overwrite: bool = False):
    """Write content to a Markdown file.

    Args:
        md_path: Output file path
        content: Markdown content
        start_date: Start date for the title
        end_date: End date for the title
        overwrite: Whether to overwrite the file if it exists

    Raises:
        OSError: If the file cannot be written
    """
    file_exists = os.path.exists(md_path)
    if file_exists and not overwrite:
        mode = 'a'
        logger.info("File '%s' exists. Appending output.", md_path)
    elif file_exists and overwrite:
        mode = 'w'
        logger.info("File '%s' exists. Overwriting as requested.", md_path)
    else:
        mode = 'w'
        logger.info("File '%s' does not exist. Creating new file.", md_path)

    with open(md_path, mode, encoding='utf-8') as f:
        if mode == 'w' or os.stat(md_path).st_size == 0:
            f.write(f"# Clockify export {start_date} to {end_date}\n\n")
        f.write(content)

    # Validate by converting to HTML (raises if the text cannot be parsed)
    with open(md_path, 'r', encoding='utf-8') as f:
        markdown.markdown(f.read())
