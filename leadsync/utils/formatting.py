"""Display helpers."""


def format_file_size(size_bytes: int) -> str:
    """Human-readable file size: B below 1 KB, KB below 1 MB, MB otherwise."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes / (1024 * 1024):.2f} MB"
