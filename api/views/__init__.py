"""Server-rendered HTML views."""
