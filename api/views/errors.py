"""Not-found and error pages."""

from html import escape


def not_found_page(what: str = "page") -> str:
    return f"""
<section style="text-align:center; margin-top:15vh;">
  <h2 class="heading">404 Not Found</h2>
  <p>Could not find the requested {escape(what)}.</p>
  <a class="btn primary" href="/dashboard/invoices">Go Back</a>
</section>"""


def error_page() -> str:
    return """
<section style="text-align:center; margin-top:15vh;">
  <h2 class="heading">Something went wrong!</h2>
  <a class="btn primary" href="">Try again</a>
</section>"""
