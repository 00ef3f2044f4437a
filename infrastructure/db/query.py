"""
Shared query execution for the Supabase repositories.
"""

import logging

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def execute_query(query, action: str):
    """
    Run a query builder, translating client errors to PersistenceError.

    Args:
        query: A postgrest query builder ready to execute
        action: What the query does, used in log and error messages

    Returns:
        The client's API response

    Raises:
        PersistenceError: If the client raised for any reason
    """
    try:
        return query.execute()
    except Exception as e:
        logger.error(f"Failed to {action}: {e}")
        raise PersistenceError(f"Failed to {action}") from e
