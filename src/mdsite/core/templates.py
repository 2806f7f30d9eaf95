"""Page shell and RSS feed templates (Jinja2)"""

from datetime import datetime, timezone
from email.utils import format_datetime

from jinja2 import Environment
from markupsafe import Markup

from mdsite.config import Settings
from mdsite.core.models import Post
from mdsite.errors import MetadataParseError


PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{{ lang }}">
  <head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
{% if settings.author %}
    <meta name="author" content="{{ settings.author }}">
{% endif %}
    <meta name="description" content="{{ description }}">
{% if settings.keywords %}
    <meta name="keywords" content="{{ settings.keywords | join(', ') }}">
{% endif %}
    <meta name="robots" content="index, follow">
    <meta property="og:title" content="{{ title }}">
    <meta property="og:url" content="{{ canonical_url }}">
    <meta property="og:type" content="{{ og_type }}">
    <meta property="og:description" content="{{ description }}">
{% for property, content in og_extras %}
    <meta property="{{ property }}" content="{{ content }}">
{% endfor %}
    <link rel="canonical" href="{{ canonical_url }}">
{% for href in stylesheets %}
    <link rel="stylesheet" href="{{ href }}">
{% endfor %}
    <link rel="alternate" type="application/rss+xml" title="RSS" href="/{{ settings.rss_file }}">
  </head>
  <body>
    <main>
{{ body_html }}
    </main>
  </body>
</html>
"""

RSS_TEMPLATE = """\
<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
<channel>
  <title>{{ settings.site_title }}</title>
  <link>{{ settings.site_url }}</link>
  <description>{{ settings.site_description }}</description>
  <language>{{ settings.language }}</language>
  <atom:link href="{{ settings.rss_url }}" rel="self" type="application/rss+xml" />
{% for item in items %}
  <item>
    <title>{{ item.post.title }}</title>
    <link>{{ item.post.url }}</link>
    <guid isPermaLink="true">{{ item.post.url }}</guid>
    <pubDate>{{ item.pub_date }}</pubDate>
    <description>{{ item.post.description }}</description>
  </item>
{% endfor %}
</channel>
</rss>
"""

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)
_page = _env.from_string(PAGE_TEMPLATE)
_rss = _env.from_string(RSS_TEMPLATE)


def rfc1123(publish_date: str) -> str:
    """Format an ISO date/datetime as an RFC 1123 GMT timestamp; naive values count as UTC."""
    try:
        when = datetime.fromisoformat(publish_date)
    except ValueError as e:
        raise MetadataParseError(f"invalid publish_date {publish_date!r}") from e
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return format_datetime(when.astimezone(timezone.utc), usegmt=True)


def render_page(
    settings: Settings,
    title: str,
    body_html: str,
    description: str,
    canonical_url: str,
    og_type: str,
    og_extras: list[tuple[str, str]] = (),
    ) -> str:
    """Wrap trusted body HTML in the full document shell."""
    return _page.render(
        settings=settings,
        lang=settings.language.split("-")[0],
        title=title,
        body_html=Markup(body_html),
        description=description,
        canonical_url=canonical_url,
        og_type=og_type,
        og_extras=list(og_extras),
        stylesheets=[settings.highlight_css, *settings.extra_stylesheets],
    )


def render_rss(settings: Settings, posts: list[Post]) -> str:
    """RSS 2.0 document; posts are emitted in the order given."""
    items = [{"post": post, "pub_date": rfc1123(post.publish_date)} for post in posts]
    return _rss.render(settings=settings, items=items)
