"""
Public site presentation helpers (locale routing, message catalogue, SEO metadata).

Apart from the product lookup in `backend`, everything here is string composition
over the site base URL and the message catalogue.
"""
