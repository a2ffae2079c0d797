"""Login page."""

from html import escape


def login_page(redirect_to: str, message: str | None = None, email: str = "") -> str:
    """Body of /login. message is the result of the previous attempt."""
    error = f'<p class="error" role="alert">{escape(message)}</p>' if message else ""
    return f"""
<main style="max-width:400px; margin:10vh auto;">
  <div class="brand heading">Acme</div>
  <form method="post" action="/login">
    <h1 class="heading">Please log in to continue.</h1>
    <div class="field">
      <label for="email">Email</label>
      <input id="email" name="email" type="email" value="{escape(email)}"
        placeholder="Enter your email address" required>
    </div>
    <div class="field">
      <label for="password">Password</label>
      <input id="password" name="password" type="password"
        placeholder="Enter password" required minlength="6">
    </div>
    <input type="hidden" name="redirectTo" value="{escape(redirect_to)}">
    <button class="btn primary" type="submit" style="width:100%">Log in &rarr;</button>
    {error}
  </form>
</main>"""
