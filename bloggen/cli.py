from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Optional

from .config import SiteConfig, load_config, resolve_base_url
from .gitdates import resolve_date
from .pages import render_index, render_robots, render_sitemap, sitemap_entries
from .posts import INDEX_NAME, POST_PREFIX, DateResolver, collect_posts
from .render import write_text
from .utils import parse_bool, utc_today

SITEMAP_NAME = "sitemap.xml"
ROBOTS_NAME = "robots.txt"
HOME_DOCUMENT = "index.html"


def info(args: argparse.Namespace, message: str) -> None:
    if not getattr(args, "quiet", False):
        print(message)


def render_outputs(args: argparse.Namespace, root: Path, resolve: DateResolver) -> dict[str, str]:
    site = SiteConfig(
        base_url=args.base_url,
        site_name=args.site_name,
        site_description=args.site_description,
        index_name=args.index_name,
        sitemap_name=SITEMAP_NAME,
    )
    posts = collect_posts(root, args.post_prefix, args.index_name, resolve)
    info(args, f"Collected {len(posts)} post(s) from {root}")

    today = utc_today()
    home_date = resolve(root, args.home_document)
    entries = sitemap_entries(posts, site, home_date, today)
    return {
        f"{args.index_name}.html": render_index(posts, site, today),
        SITEMAP_NAME: render_sitemap(entries),
        ROBOTS_NAME: render_robots(site),
    }


def build_site(args: argparse.Namespace, resolve: Optional[DateResolver] = None) -> dict[str, str]:
    """Regenerate the blog index, sitemap and robots file under ``args.root``.

    Everything is rendered before the first write, so a bad post leaves the
    previous artifacts in place. Returns the rendered outputs by file name.
    """
    if resolve is None:
        resolve = resolve_date
    root = Path(args.root)
    if not root.is_dir():
        print(f"Failed to open root directory: {root} is not a directory", file=sys.stderr)
        sys.exit(1)

    try:
        outputs = render_outputs(args, root, resolve)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Failed to collect posts: {exc}", file=sys.stderr)
        sys.exit(1)

    for name, text in outputs.items():
        if args.dry_run:
            info(args, f"would generate: {name} ({len(text)} chars)")
            continue
        try:
            write_text(root / name, text)
        except OSError as exc:
            print(f"Failed to write {name}: {exc}", file=sys.stderr)
            sys.exit(1)
        info(args, f"generated: {name}")
    return outputs


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    config = load_config(Path(pre_args.config))

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    parser = argparse.ArgumentParser(description="Regenerate the blog index, sitemap.xml and robots.txt.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--root",
        default=cfg_str("root", "."),
        help="Directory holding the post files; outputs are written here too.",
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help="Public site URL (defaults to $BASE_URL, then base_url in the config).",
    )
    parser.add_argument(
        "--post-prefix",
        default=cfg_str("post_prefix", POST_PREFIX),
        help="File name prefix that marks a blog post.",
    )
    parser.add_argument(
        "--index-name",
        default=cfg_str("index_name", INDEX_NAME),
        help="Name of the generated index page, without extension.",
    )
    parser.add_argument(
        "--home-document",
        default=cfg_str("home_document", HOME_DOCUMENT),
        help="Home page file whose date is used for the site root in the sitemap.",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", SiteConfig.site_name), help="Site title.")
    parser.add_argument(
        "--site-description",
        default=cfg_str("site_description", SiteConfig.site_description),
        help="Description used in the index page meta tags.",
    )
    parser.add_argument(
        "--dry-run",
        action=argparse.BooleanOptionalAction,
        default=parse_bool(config.get("dry_run")),
        help="Render everything but do not write any file.",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print errors.")
    args = parser.parse_args(argv)
    args.base_url = resolve_base_url(args.base_url, config)
    return args


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    start = time.perf_counter()
    build_site(args)
    elapsed = time.perf_counter() - start
    info(args, f"Build completed in {elapsed:.2f}s.")


if __name__ == "__main__":
    main()
