"""
Page title and id helpers for the static link database, which stores titles
in their sanitized (underscored, escaped) form.
"""

def get_sanitized_page_title(page_title: str) -> str:
    """Returns the page title in the form used by the ``pages`` table.

    Examples:
      "Notre Dame Fighting Irish"   =>   "Notre_Dame_Fighting_Irish"
      "Farmers' market"             =>   "Farmers\\'_market"

    Raises:
      ValueError: If the provided page title is invalid.
    """
    validate_page_title(page_title)
    return (page_title.strip()
            .replace('\\', '\\\\')  # backslashes first
            .replace("'", "\\'")
            .replace('"', '\\"')
            .replace(' ', '_'))


def get_readable_page_title(sanitized_page_title: str) -> str:
    """Inverse of ``get_sanitized_page_title``."""
    return (sanitized_page_title.strip()
            .replace('_', ' ')
            .replace('\\"', '"')
            .replace("\\'", "'")
            .replace('\\\\', '\\'))  # backslashes last


def validate_page_id(page_id: int):
    """Raises ValueError unless ``page_id`` is a positive integer."""
    if isinstance(page_id, bool) or not isinstance(page_id, int) or page_id <= 0:
        raise ValueError(
            f'Invalid page ID "{page_id}" provided. Page ID must be a positive integer.'
        )


def validate_page_title(page_title: str):
    """Raises ValueError unless ``page_title`` is a non-empty string."""
    if not page_title or not isinstance(page_title, str):
        raise ValueError(
            f'Invalid page title "{page_title}" provided. Page title must be a non-empty string.'
        )


def validate_max_depth(max_depth: int):
    """Raises ValueError unless ``max_depth`` is a non-negative integer."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        raise ValueError(
            f'Invalid max depth "{max_depth}" provided. Max depth must be a non-negative integer.'
        )
