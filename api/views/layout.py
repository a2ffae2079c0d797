"""Root layout and dashboard shell shared by every page."""

from html import escape

from starlette.responses import HTMLResponse

FONTS_URL = (
    "https://fonts.googleapis.com/css2?"
    "family=Inter:wght@400;500;600&family=Lusitana:wght@400;700&display=swap"
)

BASE_CSS = """
:root { --muted:#6b7280; --b:#e5e7eb; --bg:#f9fafb; --call:#2563eb; --danger:#dc2626; --ok:#16a34a; }
body { font-family: 'Inter', system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif; margin:0; line-height:1.45; color:#111827; }
.antialiased { -webkit-font-smoothing: antialiased; -moz-osx-font-smoothing: grayscale; }
.heading { font-family: 'Lusitana', Georgia, serif; }
.layout { display:flex; min-height:100vh; }
.sidenav { width:220px; padding:16px; background:var(--bg); border-right:1px solid var(--b); display:flex; flex-direction:column; gap:8px; }
.sidenav a, .sidenav button { display:block; padding:10px 12px; border-radius:8px; text-decoration:none; color:#111827; background:#fff; border:1px solid var(--b); text-align:left; font:inherit; cursor:pointer; }
.sidenav a.active { background:#eff6ff; color:var(--call); }
.brand { padding:16px 12px; border-radius:8px; background:var(--call); color:#fff; font-size:20px; }
main { flex:1; padding:24px 32px; }
table { border-collapse: collapse; width: 100%; margin: 12px 0; }
th, td { border-bottom: 1px solid var(--b); padding: 10px 8px; text-align:left; }
th { font-weight:500; }
.row { margin: 12px 0; display:flex; gap:10px; flex-wrap:wrap; align-items:center; justify-content:space-between; }
.btn { display:inline-block; padding:8px 12px; border:1px solid var(--b); border-radius:8px; background:#fff; cursor:pointer; text-decoration:none; color:#111827; font:inherit; }
.btn.primary { background:var(--call); border-color:var(--call); color:#fff; }
.btn.danger { border-color:var(--danger); color:var(--danger); }
form.inline { display:inline; }
input, select { padding:8px; border:1px solid var(--b); border-radius:6px; font:inherit; }
.search input { width:100%; min-width:260px; }
.muted { color:var(--muted); }
.error { color:var(--danger); font-size:14px; margin:4px 0; }
.badge { padding:2px 8px; border-radius:999px; font-size:12px; }
.badge.pending { background:#f3f4f6; color:var(--muted); }
.badge.paid { background:var(--ok); color:#fff; }
.cards { display:flex; gap:14px; flex-wrap:wrap; }
.card { border:1px solid var(--b); padding:14px 18px; border-radius:12px; background:var(--bg); min-width:180px; }
.card .value { font-size:24px; }
.pagination { display:flex; gap:6px; justify-content:center; margin-top:16px; }
.pagination a, .pagination span { padding:6px 10px; border:1px solid var(--b); border-radius:6px; text-decoration:none; color:#111827; }
.pagination .current { background:var(--call); border-color:var(--call); color:#fff; }
.avatar { width:28px; height:28px; border-radius:50%; vertical-align:middle; margin-right:8px; }
.field { margin:12px 0; display:flex; flex-direction:column; gap:4px; max-width:420px; }
#toaster { position:fixed; top:16px; right:16px; z-index:50; display:flex; flex-direction:column; gap:8px; }
.toast { background:#fff; border:1px solid var(--b); border-radius:8px; padding:10px 14px; box-shadow:0 6px 18px rgba(0,0,0,.08); }
.toast.error { border-color:var(--danger); color:var(--danger); }
"""

TOASTER_JS = """
<script>
function toast(message, kind) {
  const el = document.createElement('div');
  el.className = 'toast' + (kind === 'error' ? ' error' : '');
  el.textContent = message;
  document.getElementById('toaster').appendChild(el);
  setTimeout(() => el.remove(), 4000);
}
async function deleteInvoice(id) {
  const res = await fetch('/api/actions', {
    method: 'POST',
    headers: {'Content-Type': 'application/json'},
    body: JSON.stringify({domain: 'invoice', action: 'delete', data: {id: id}}),
  });
  const body = await res.json();
  if (body.success) {
    toast(body.data.message);
    setTimeout(() => window.location.reload(), 800);
  } else {
    toast(body.error.message, 'error');
  }
}
</script>
"""


def root_layout(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    """Wrap body in the document shell: fonts, styles and the top-right toaster."""
    html = f"""<!doctype html>
<html lang="en"><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{escape(title)}</title>
<link rel="stylesheet" href="{FONTS_URL}">
<style>{BASE_CSS}</style>
{TOASTER_JS}
</head><body class="antialiased">
{body}
<div id="toaster"></div>
</body></html>"""
    return HTMLResponse(html, status_code=status_code)


def dashboard_shell(
    title: str,
    content: str,
    active: str = "",
    status_code: int = 200,
) -> HTMLResponse:
    """Root layout plus the dashboard side navigation."""
    links = [
        ("home", "/dashboard", "Home"),
        ("invoices", "/dashboard/invoices", "Invoices"),
        ("customers", "/dashboard/customers", "Customers"),
    ]
    nav = "".join(
        f'<a href="{href}" class="{"active" if key == active else ""}">{label}</a>'
        for key, href, label in links
    )
    body = f"""
<div class="layout">
  <aside class="sidenav">
    <a class="brand heading" href="/dashboard">Acme</a>
    {nav}
    <form method="post" action="/logout" style="margin-top:auto">
      <button type="submit">Sign Out</button>
    </form>
  </aside>
  <main>{content}</main>
</div>"""
    return root_layout(f"{title} | Acme Dashboard", body, status_code=status_code)

