"""Server-rendered pages.

- Jinja2 templates served by the Core FastAPI app
- Shoelace web components loaded from a CDN; no build step
- form fields bound to page models through the `bind-for` attribute
"""
