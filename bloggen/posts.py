from __future__ import annotations

from pathlib import Path
from typing import Callable

from .content import Post, extract_metadata, url_from_filename
from .gitdates import resolve_date

POST_PREFIX = "blog_post_"
INDEX_NAME = "blog_index"

DateResolver = Callable[[Path, str], str]


def list_post_files(root: Path, prefix: str = POST_PREFIX, index_name: str = INDEX_NAME) -> list[str]:
    names = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        name = entry.name
        if entry.is_symlink() or not entry.is_file():
            continue
        if not name.startswith(prefix) or name.startswith(index_name):
            continue
        names.append(name)
    return names


def sort_posts(posts: list[Post]) -> list[Post]:
    # sorted() is stable, so equal dates keep enumeration order.
    return sorted(posts, key=lambda post: post.date, reverse=True)


def collect_posts(
    root: Path,
    prefix: str = POST_PREFIX,
    index_name: str = INDEX_NAME,
    resolve: DateResolver = resolve_date,
) -> list[Post]:
    """Read every post file under ``root`` and return them newest first.

    Unreadable files raise; a post is never silently dropped.
    """
    posts = []
    for name in list_post_files(root, prefix, index_name):
        html_text = (root / name).read_text(encoding="utf-8")
        title, description = extract_metadata(html_text)
        posts.append(
            Post(
                filename=name,
                url=url_from_filename(name),
                title=title,
                description=description,
                date=resolve(root, name),
            )
        )
    return sort_posts(posts)
