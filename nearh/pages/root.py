"""Minimal HTML pages for the gate's redirect targets (home, login, waiting room, dashboards).

The real UI is a separate front end; these pages let the routing be
exercised end to end and show what the gate resolved for the caller.
"""

from html import escape

from nearh.application.dtos.profile import CachedProfile

_STYLE = """
        body { font-family: system-ui, sans-serif; margin: 0; background: #0b1320; color: #e6edf3; }
        .wrap { max-width: 560px; margin: 0 auto; padding: 3rem 1rem; }
        h1 { font-size: 2rem; margin: 0 0 0.5rem 0; }
        .card { background: #111b2e; border: 1px solid #1f2d47; padding: 1.25rem 1.5rem; margin-top: 1.5rem; }
        .muted { color: #8b9bb4; }
        code { font-family: ui-monospace, monospace; }
        a { color: #7cc4ff; }
"""


def _profile_summary(profile: CachedProfile | None) -> str:
    if profile is None:
        return '<p class="muted">Not signed in.</p>'
    hospital = escape(profile.associated_hospital_id or "none")
    return (
        f"<p>Role: <code>{escape(profile.role.value)}</code> &middot; "
        f"status: <code>{escape(profile.status.value)}</code> &middot; "
        f"hospital: <code>{hospital}</code></p>"
    )


def render_page(app_name: str, title: str, message: str, profile: CachedProfile | None = None) -> str:
    """Return HTML for a placeholder page."""
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(title)} &middot; {escape(app_name)}</title>
    <style>{_STYLE}</style>
</head>
<body>
    <div class="wrap">
        <h1>{escape(title)}</h1>
        <p class="muted">{escape(message)}</p>
        <section class="card">
            {_profile_summary(profile)}
            <p>API routes live under <code>/api/v1</code>; see <a href="/docs">/docs</a>.</p>
        </section>
    </div>
</body>
</html>
""".strip()
