# core/errors.py

from fastapi import HTTPException

from core.logging_config import logger


def extract_supabase_error(error: Exception) -> str:
    """
    Pull a readable message out of a Supabase client error.
    Handles PostgREST errors (``.message``), errors carrying args,
    and plain exceptions.
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)

    if getattr(error, "args", None):
        return str(error.args[0])

    return str(error) or error.__class__.__name__


def handle_supabase_error(error: Exception, operation: str = "Database operation", status_code: int = 500) -> HTTPException:
    """
    Handle Supabase errors with consistent formatting.
    Returns HTTPException (doesn't raise) so caller can customize or re-raise.

    Args:
        error: The exception that occurred
        operation: Description of what failed (e.g., "Failed to save role permissions")
        status_code: HTTP status code when nothing more specific applies

    Returns:
        HTTPException with standardized error message
    """
    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Record already exists")
    elif "foreign key" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid reference")
    elif "check constraint" in error_lower or "invalid input value" in error_lower:
        return HTTPException(status_code=400, detail=f"{operation}: Invalid value")
    elif "row-level security" in error_lower or "permission denied" in error_lower:
        # service role key missing or replaced by an anon key
        return HTTPException(status_code=403, detail=f"{operation}: Not permitted by the database")
    elif "not found" in error_lower or "does not exist" in error_lower:
        return HTTPException(status_code=404, detail=f"{operation}: Resource not found")
    else:
        return HTTPException(status_code=status_code, detail=f"{operation} failed")
