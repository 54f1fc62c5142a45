# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

LIKE_ESCAPE = "\\"


# =============================================================================
# Search Utilities
# =============================================================================

def escape_like(term: str) -> str:
    """
    Escape LIKE wildcards so a search term matches literally.

    Use together with `escape=LIKE_ESCAPE` on the column operator.

    Example:
        escape_like("50%_off")  # "50\\%\\_off"
    """
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(term: str) -> str:
    """Pattern for a case-insensitive substring match (use with ilike)."""
    return f"%{escape_like(term.strip())}%"
