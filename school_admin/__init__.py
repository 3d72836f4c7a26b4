"""School administration backend."""
