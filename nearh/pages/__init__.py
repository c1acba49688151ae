"""Server-rendered placeholder pages behind the request gate."""

from nearh.pages.root import render_page

__all__ = ["render_page"]
