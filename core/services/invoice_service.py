"""
Invoice persistence.

Writes are single statements that report failure as a PersistenceError
value instead of raising; the underlying exception is logged here and never
leaves this module. Reads raise as usual and are handled by the HTTP layer.
"""

import logging
import math
from uuid import UUID

import psycopg2

from clients.postgres_client import PostgresClient
from core.models import CardData, InvoiceEdit, InvoiceRow, InvoiceStatus
from core.money import from_cents
from core.outcomes import PersistenceError, Written, WriteResult

logger = logging.getLogger(__name__)


class InvoiceNotFoundError(ValueError):
    """No invoice with the requested id."""

    def __init__(self, invoice_id):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} not found")


# Shared search predicate for listing and page count. Five placeholders.
_SEARCH_WHERE = """
    customers.name ILIKE %s
    OR customers.email ILIKE %s
    OR invoices.amount::text ILIKE %s
    OR invoices.date::text ILIKE %s
    OR invoices.status ILIKE %s
"""


class InvoiceService:
    """Service for invoice reads and writes."""

    def __init__(self, postgres: PostgresClient, items_per_page: int = 6):
        self.postgres = postgres
        self.items_per_page = items_per_page

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(
        self,
        customer_id: str,
        amount_cents: int,
        status: InvoiceStatus,
        date: str,
    ) -> WriteResult:
        """
        Insert one invoice.

        Args:
            customer_id: Customer the invoice bills
            amount_cents: Positive amount in cents
            status: pending or paid
            date: Creation date as YYYY-MM-DD

        Returns:
            Written(1) or PersistenceError("create")
        """
        try:
            rows = self.postgres.execute_returning(
                """
                INSERT INTO invoices (customer_id, amount, status, date)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (customer_id, amount_cents, status.value, date)
            )
        except psycopg2.Error as e:
            logger.exception(f"Failed to create invoice for customer {customer_id}")
            return PersistenceError("create", str(e))

        logger.info(f"Created invoice {rows[0]['id']} for customer {customer_id}")
        return Written(len(rows))

    def update(
        self,
        invoice_id: str,
        customer_id: str,
        amount_cents: int,
        status: InvoiceStatus,
    ) -> WriteResult:
        """
        Update customer, amount and status of one invoice. The date is kept.

        An id that matches no row is not an error: the result is Written(0).

        Returns:
            Written(rows touched) or PersistenceError("update")
        """
        try:
            rows = self.postgres.execute_returning(
                """
                UPDATE invoices
                SET customer_id = %s, amount = %s, status = %s
                WHERE id = %s
                RETURNING id
                """,
                (customer_id, amount_cents, status.value, invoice_id)
            )
        except psycopg2.Error as e:
            logger.exception(f"Failed to update invoice {invoice_id}")
            return PersistenceError("update", str(e))

        if not rows:
            logger.warning(f"Update matched no invoice with id {invoice_id}")
        return Written(len(rows))

    def delete(self, invoice_id: str) -> WriteResult:
        """
        Delete one invoice.

        Returns:
            Written(rows removed) or PersistenceError("delete")
        """
        try:
            rows = self.postgres.execute_returning(
                "DELETE FROM invoices WHERE id = %s RETURNING id",
                (invoice_id,)
            )
        except psycopg2.Error as e:
            logger.exception(f"Failed to delete invoice {invoice_id}")
            return PersistenceError("delete", str(e))

        if not rows:
            logger.warning(f"Delete matched no invoice with id {invoice_id}")
        return Written(len(rows))

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def fetch_filtered(self, query: str, current_page: int = 1) -> list[InvoiceRow]:
        """
        Search invoices by customer name/email, amount, date or status.

        Args:
            query: Case-insensitive substring; empty matches everything
            current_page: 1-based page number

        Returns:
            One page of invoices, newest first
        """
        pattern = f"%{query}%"
        offset = (max(current_page, 1) - 1) * self.items_per_page

        rows = self.postgres.execute(
            f"""
            SELECT
                invoices.id, invoices.customer_id, invoices.amount,
                invoices.date, invoices.status,
                customers.name, customers.email, customers.image_url
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {_SEARCH_WHERE}
            ORDER BY invoices.date DESC
            LIMIT %s OFFSET %s
            """,
            (pattern, pattern, pattern, pattern, pattern, self.items_per_page, offset)
        )

        return [InvoiceRow.model_validate(row) for row in rows]

    def count_pages(self, query: str) -> int:
        """Number of listing pages the search produces."""
        pattern = f"%{query}%"

        count = self.postgres.execute_scalar(
            f"""
            SELECT COUNT(*)
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            WHERE {_SEARCH_WHERE}
            """,
            (pattern, pattern, pattern, pattern, pattern)
        )

        return math.ceil((count or 0) / self.items_per_page)

    def get_by_id(self, invoice_id: UUID) -> InvoiceEdit | None:
        """
        Get invoice for the edit form.

        Returns:
            Invoice with amount converted back to dollars, or None.
        """
        row = self.postgres.execute_single(
            "SELECT id, customer_id, amount, status FROM invoices WHERE id = %s",
            (invoice_id,)
        )

        if row is None:
            return None

        return InvoiceEdit(
            id=row["id"],
            customer_id=row["customer_id"],
            amount=from_cents(row["amount"]),
            status=row["status"],
        )

    def latest(self, limit: int = 5) -> list[InvoiceRow]:
        """Most recent invoices with their customers."""
        rows = self.postgres.execute(
            """
            SELECT
                invoices.id, invoices.customer_id, invoices.amount,
                invoices.date, invoices.status,
                customers.name, customers.email, customers.image_url
            FROM invoices
            JOIN customers ON invoices.customer_id = customers.id
            ORDER BY invoices.date DESC
            LIMIT %s
            """,
            (limit,)
        )

        return [InvoiceRow.model_validate(row) for row in rows]

    def card_data(self) -> CardData:
        """Invoice/customer counts and paid/pending totals for the overview."""
        row = self.postgres.execute_single(
            """
            SELECT
                (SELECT COUNT(*) FROM invoices) AS number_of_invoices,
                (SELECT COUNT(*) FROM customers) AS number_of_customers,
                COALESCE(SUM(CASE WHEN status = 'paid' THEN amount ELSE 0 END), 0) AS total_paid_cents,
                COALESCE(SUM(CASE WHEN status = 'pending' THEN amount ELSE 0 END), 0) AS total_pending_cents
            FROM invoices
            """
        )

        return CardData.model_validate(row)
