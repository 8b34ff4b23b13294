"""Body HTML from a parsed document via the markdown-it renderer"""

from mdview.core.models import ParsedDoc
from mdview.core.parse import make_parser


WELCOME_MARKDOWN = "# Welcome to {app_name}\n\nOpen a markdown file to begin.\n"


def render_html(parsed: ParsedDoc, parser_config: str = 'gfm-like', app_name: str = 'mdview') -> str:
    """Render parsed.tokens, including any heading ids set on them, to body HTML.

    A blank document renders the welcome placeholder instead.
    """
    md = parsed.md or make_parser(parser_config)
    if not parsed.markdown.strip():
        return md.render(WELCOME_MARKDOWN.format(app_name=app_name))
    return md.renderer.render(parsed.tokens, md.options, {})
