#!/usr/bin/env python3
"""
SoloForge services - public site and admin console API.
Also prints robots.txt, sitemap.xml and page metadata for static hosting.
"""

import argparse
import json
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)

#
# NOTE: Keep soloforge imports lazy (inside functions) so printing a sitemap does not
# import FastAPI or supabase.
#


def print_robots() -> None:
    from soloforge.site.config import load_site_config
    from soloforge.site.seo import render_robots

    sys.stdout.write(render_robots(load_site_config().site_url))


def print_sitemap() -> None:
    from soloforge.site.config import load_site_config
    from soloforge.site.seo import render_sitemap, sitemap_entries

    sys.stdout.write(render_sitemap(sitemap_entries(load_site_config().site_url)))


def print_metadata(page: str, locale: str) -> None:
    """
    Print a page's metadata as JSON.

    Args:
        page: Page key (home, products, pricing, ...)
        locale: Locale code (en, zh)
    """
    from soloforge.site.metadata import build_page_metadata

    meta = build_page_metadata(locale, page)
    print(json.dumps(meta.to_dict(), indent=2, ensure_ascii=False))


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="SoloForge public site and admin console services",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve the public site (robots, sitemap, metadata API)
  python main.py --serve-site --port 3000

  # Serve the admin console API (/api/admin/me, /api/admin/allowlist)
  python main.py --serve-admin --port 3001

  # Print the sitemap for static hosting
  python main.py --sitemap > sitemap.xml

  # Print pricing page metadata in Chinese
  python main.py --metadata pricing --locale zh
        """,
    )

    parser.add_argument("--serve-site", action="store_true", help="Run the public site HTTP server")
    parser.add_argument("--serve-admin", action="store_true", help="Run the admin console API HTTP server")
    parser.add_argument("--host", default="0.0.0.0", help="Server bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Server listen port (default: 3000 site, 3001 admin)")
    parser.add_argument("--robots", action="store_true", help="Print robots.txt to stdout")
    parser.add_argument("--sitemap", action="store_true", help="Print sitemap.xml to stdout")
    parser.add_argument("--metadata", metavar="PAGE", help="Print metadata JSON for a page (e.g., --metadata pricing)")
    parser.add_argument("--locale", default="en", help="Locale for --metadata (default: en)")

    args = parser.parse_args()

    try:
        if args.serve_site:
            from soloforge.api.site import run as run_site

            run_site(host=args.host, port=args.port or 3000)
            return

        if args.serve_admin:
            from soloforge.api.admin import run as run_admin

            run_admin(host=args.host, port=args.port or 3001)
            return

        if args.robots:
            print_robots()
            return

        if args.sitemap:
            print_sitemap()
            return

        if args.metadata:
            print_metadata(args.metadata, args.locale)
            return

        # No arguments provided
        parser.print_help()

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    main()
