"""
Published posts and the HTML fragments that list them.
"""

from dataclasses import dataclass
from typing import Iterable, List

from .frontmatter import Document
from .utils import display_date, escape_html, parse_iso_date


@dataclass(frozen=True)
class Post:
    """A validated, non-draft document together with its rendered body."""
    document: Document
    html: str
    reading_time: int
    source: str = ''

    @property
    def meta(self):
        return self.document.metadata

    @property
    def title(self) -> str:
        return self.meta['title']

    @property
    def slug(self) -> str:
        return self.meta['slug']

    @property
    def date(self) -> str:
        return self.meta['date']

    @property
    def updated(self):
        return self.document.get('updated') or None

    @property
    def description(self) -> str:
        return self.meta['description']

    @property
    def tags(self) -> List[str]:
        return list(self.document.get('tags', []))

    @property
    def path(self) -> str:
        """Site-relative URL of the post."""
        return f"/posts/{self.slug}/"


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Newest first. Posts sharing a date keep their input order."""
    return sorted(posts, key=lambda post: parse_iso_date(post.date), reverse=True)


def tags_html(tags: Iterable[str]) -> str:
    items = ''.join(f'<li class="tag">{escape_html(tag)}</li>' for tag in tags)
    return f'<ul class="tags">{items}</ul>'


def post_list_item_html(post: Post) -> str:
    """One ``<li>`` entry for the home and writing pages."""
    return f'''<li class="post-list-item">
  <h2><a href="{post.path}">{escape_html(post.title)}</a></h2>
  <div class="post-meta">
    <time datetime="{escape_html(post.date)}">{display_date(post.date)}</time>
  </div>
  <p class="description">{escape_html(post.description)}</p>
  {tags_html(post.tags)}
</li>'''


def post_list_html(posts: Iterable[Post]) -> str:
    return '\n'.join(post_list_item_html(post) for post in posts)
