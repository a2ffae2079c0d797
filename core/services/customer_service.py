"""
Customer read operations.

Customers are never written by the dashboard; these queries feed the
invoice form's customer picker and the customers page.
"""

import logging

from clients.postgres_client import PostgresClient
from core.models import CustomerField, CustomerSummary

logger = logging.getLogger(__name__)


class CustomerService:
    """Service for customer queries."""

    def __init__(self, postgres: PostgresClient):
        self.postgres = postgres

    def list_all(self) -> list[CustomerField]:
        """
        All customers for selection lists.

        Returns:
            Customers ordered by name
        """
        rows = self.postgres.execute(
            "SELECT id, name FROM customers ORDER BY name ASC"
        )

        return [CustomerField.model_validate(row) for row in rows]

    def search(self, query: str) -> list[CustomerSummary]:
        """
        Search customers by name or email, with invoice totals.

        Uses ILIKE for case-insensitive partial matching. Totals are in cents.

        Args:
            query: Search string; empty matches everyone

        Returns:
            Matching customers ordered by name
        """
        pattern = f"%{query}%"

        rows = self.postgres.execute(
            """
            SELECT
                customers.id,
                customers.name,
                customers.email,
                customers.image_url,
                COUNT(invoices.id) AS total_invoices,
                COALESCE(SUM(CASE WHEN invoices.status = 'pending' THEN invoices.amount ELSE 0 END), 0) AS total_pending,
                COALESCE(SUM(CASE WHEN invoices.status = 'paid' THEN invoices.amount ELSE 0 END), 0) AS total_paid
            FROM customers
            LEFT JOIN invoices ON customers.id = invoices.customer_id
            WHERE customers.name ILIKE %s
               OR customers.email ILIKE %s
            GROUP BY customers.id, customers.name, customers.email, customers.image_url
            ORDER BY customers.name ASC
            """,
            (pattern, pattern)
        )

        return [CustomerSummary.model_validate(row) for row in rows]
